from datetime import timedelta

import pytest

from src.application.use_cases.campaigns.commands import (
    CancelCampaign, CompleteCampaign, CreateCampaign, DeleteCampaign,
    LaunchCampaign, PauseCampaign, RecordCampaignMetrics, ResumeCampaign,
    ScheduleCampaign, UpdateCampaignDetails, UpdateCampaignSegment)
from src.application.use_cases.campaigns.queries import (
    CheckCampaignTemplate, GetCampaign, ListCampaigns, PreviewCampaignMessage)
from src.domain.enums import CampaignStatus, CampaignType, MessageChannel
from src.domain.events import (CampaignCompleted, CampaignCreated,
                               CampaignLaunched)
from src.domain.exceptions import (InvariantViolationException,
                                   PermissionDeniedError,
                                   ResourceNotFoundException,
                                   UnresolvedTenantException)
from src.domain.value_objects import Segment, SegmentCondition
from src.shared.context import PlanInfo, TenantContext
from tests.conftest import NOW


def _create_command(vip_segment, **kwargs) -> CreateCampaign:
    return CreateCampaign(
        name=kwargs.pop("name", "Spring Promo"),
        campaign_type=kwargs.pop("campaign_type", CampaignType.PROMOTIONAL),
        target_segment=vip_segment,
        template="Hi {{first_name}}, enjoy {{discount}} off!",
        channel=kwargs.pop("channel", MessageChannel.EMAIL),
        variables={"discount": "20%"},
        **kwargs,
    )


@pytest.mark.asyncio
async def test_full_lifecycle(dispatcher, tenant_context, vip_segment, publisher, campaign_repo):
    campaign_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)

    await dispatcher.dispatch_command(LaunchCampaign(campaign_id, 120), tenant_context)
    await dispatcher.dispatch_command(PauseCampaign(campaign_id), tenant_context)
    await dispatcher.dispatch_command(ResumeCampaign(campaign_id), tenant_context)
    await dispatcher.dispatch_command(
        RecordCampaignMetrics(campaign_id, {"total_sent": 120, "delivered": 118}), tenant_context
    )
    await dispatcher.dispatch_command(CompleteCampaign(campaign_id), tenant_context)

    campaign = await dispatcher.dispatch_query(GetCampaign(campaign_id), tenant_context)
    assert campaign.status == CampaignStatus.COMPLETED
    assert campaign.metrics.delivered == 118
    assert [type(e) for e in publisher.events] == [
        CampaignCreated,
        CampaignLaunched,
        CampaignCompleted,
    ]
    assert all(e.tenant_id == tenant_context.tenant_id for e in publisher.events)


@pytest.mark.asyncio
async def test_second_launch_is_rejected_and_state_kept(dispatcher, tenant_context, vip_segment):
    campaign_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)
    await dispatcher.dispatch_command(LaunchCampaign(campaign_id, 120), tenant_context)

    with pytest.raises(InvariantViolationException):
        await dispatcher.dispatch_command(LaunchCampaign(campaign_id, 5), tenant_context)

    campaign = await dispatcher.dispatch_query(GetCampaign(campaign_id), tenant_context)
    assert campaign.status == CampaignStatus.SENDING


@pytest.mark.asyncio
async def test_edit_schedule_and_cancel(dispatcher, tenant_context, vip_segment):
    campaign_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)
    segment = Segment(conditions=(SegmentCondition("city", "equals", "Kampala"),))

    await dispatcher.dispatch_command(
        UpdateCampaignDetails(campaign_id, name="Summer Promo"), tenant_context
    )
    await dispatcher.dispatch_command(UpdateCampaignSegment(campaign_id, segment), tenant_context)
    await dispatcher.dispatch_command(
        ScheduleCampaign(campaign_id, NOW + timedelta(days=3)), tenant_context
    )
    await dispatcher.dispatch_command(CancelCampaign(campaign_id), tenant_context)

    campaign = await dispatcher.dispatch_query(GetCampaign(campaign_id), tenant_context)
    assert campaign.name == "Summer Promo"
    assert campaign.target_segment == segment
    assert campaign.status == CampaignStatus.CANCELLED


@pytest.mark.asyncio
async def test_campaigns_are_tenant_scoped(
    dispatcher, tenant_context, other_tenant_context, vip_segment
):
    campaign_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)

    with pytest.raises(ResourceNotFoundException):
        await dispatcher.dispatch_query(GetCampaign(campaign_id), other_tenant_context)
    with pytest.raises(ResourceNotFoundException):
        await dispatcher.dispatch_command(DeleteCampaign(campaign_id), other_tenant_context)

    page = await dispatcher.dispatch_query(ListCampaigns(), other_tenant_context)
    assert page.items == []


@pytest.mark.asyncio
async def test_requires_resolved_tenant(dispatcher, vip_segment):
    with pytest.raises(UnresolvedTenantException):
        await dispatcher.dispatch_command(_create_command(vip_segment), None)


@pytest.mark.asyncio
async def test_requires_marketing_module(dispatcher, vip_segment):
    context = TenantContext(
        tenant_id="tenant-1",
        slug="acme",
        name="Acme",
        plan=PlanInfo.build(id="basic", name="Basic", modules=["reports"]),
    )

    with pytest.raises(PermissionDeniedError):
        await dispatcher.dispatch_command(_create_command(vip_segment), context)


@pytest.mark.asyncio
async def test_list_filters_and_delete(dispatcher, tenant_context, vip_segment, clock):
    email_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)
    clock.advance(minutes=1)
    sms_id = await dispatcher.dispatch_command(
        _create_command(vip_segment, name="Reminder", channel=MessageChannel.SMS), tenant_context
    )

    page = await dispatcher.dispatch_query(
        ListCampaigns(channel=MessageChannel.SMS), tenant_context
    )
    assert [c.id for c in page.items] == [sms_id]

    await dispatcher.dispatch_command(DeleteCampaign(email_id), tenant_context)
    page = await dispatcher.dispatch_query(ListCampaigns(), tenant_context)
    assert page.total == 1


@pytest.mark.asyncio
async def test_preview_and_template_check(dispatcher, tenant_context, vip_segment):
    campaign_id = await dispatcher.dispatch_command(_create_command(vip_segment), tenant_context)

    preview = await dispatcher.dispatch_query(
        PreviewCampaignMessage(campaign_id, {"first_name": "Ana"}), tenant_context
    )
    check = await dispatcher.dispatch_query(
        CheckCampaignTemplate("Hi {{first_name}} {{last_name}}", {"first_name": "x", "code": 1}),
        tenant_context,
    )

    assert preview == "Hi Ana, enjoy 20% off!"
    assert check.is_valid is False
    assert check.placeholders == ["first_name", "last_name"]
    assert check.missing == ["last_name"]
    assert check.unused == ["code"]
