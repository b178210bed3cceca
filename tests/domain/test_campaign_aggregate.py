from datetime import timedelta

import pytest

from src.domain.enums import CampaignStatus
from src.domain.events import CampaignCompleted, CampaignCreated, CampaignLaunched
from src.domain.exceptions import InvariantViolationException, ValidationException
from src.domain.value_objects import Segment, SegmentCondition
from tests.conftest import NOW


def _snapshot(campaign):
    return campaign.status, campaign.metrics, campaign.template


def _drive_to(campaign, status, clock):
    """Walk a DRAFT campaign to ``status`` through legal transitions"""
    if status == CampaignStatus.DRAFT:
        return
    if status == CampaignStatus.SCHEDULED:
        campaign.schedule(clock.now() + timedelta(days=1), clock)
        return
    campaign.launch(10, clock)
    if status == CampaignStatus.PAUSED:
        campaign.pause(clock)
    elif status == CampaignStatus.COMPLETED:
        campaign.complete(clock)
    elif status == CampaignStatus.CANCELLED:
        campaign.cancel(clock)


class TestCampaignScenario:
    def test_spring_promo_launch(self, make_campaign, clock):
        """
        GIVEN a DRAFT campaign "Spring Promo" targeting vip-tagged clients
        WHEN it is launched to 120 recipients
        THEN it is SENDING, CampaignLaunched is queued, and a second launch fails.
        """
        # GIVEN
        campaign = make_campaign(name="Spring Promo")
        assert campaign.status == CampaignStatus.DRAFT
        assert campaign.target_segment.to_dict() == {
            "conditions": [{"field": "tags", "operator": "contains", "value": "vip"}],
            "logic": "AND",
        }

        # WHEN
        campaign.launch(120, clock)

        # THEN
        assert campaign.status == CampaignStatus.SENDING
        assert campaign.start_date == NOW
        launched = [e for e in campaign.pending_events if isinstance(e, CampaignLaunched)]
        assert len(launched) == 1
        assert launched[0].target_count == 120

        with pytest.raises(InvariantViolationException):
            campaign.launch(120, clock)


class TestCampaignCreation:
    def test_create_queues_created_event(self, make_campaign):
        campaign = make_campaign()

        [event] = campaign.pending_events
        assert isinstance(event, CampaignCreated)
        assert event.campaign_type == "PROMOTIONAL"
        assert event.tenant_id == "tenant-1"

    def test_empty_name_rejected(self, make_campaign):
        with pytest.raises(ValidationException) as exc_info:
            make_campaign(name="   ")
        assert exc_info.value.details == {"field": "name"}

    def test_segment_without_conditions_rejected(self):
        with pytest.raises(ValidationException):
            Segment(conditions=())

    def test_scheduled_at_in_past_rejected(self, make_campaign):
        with pytest.raises(ValidationException):
            make_campaign(scheduled_at=NOW - timedelta(minutes=1))


class TestCampaignTransitions:
    @pytest.mark.parametrize(
        "status, action",
        [
            (CampaignStatus.SENDING, "schedule"),
            (CampaignStatus.PAUSED, "launch"),
            (CampaignStatus.COMPLETED, "launch"),
            (CampaignStatus.DRAFT, "pause"),
            (CampaignStatus.SCHEDULED, "pause"),
            (CampaignStatus.SENDING, "resume"),
            (CampaignStatus.DRAFT, "complete"),
            (CampaignStatus.PAUSED, "complete"),
            (CampaignStatus.COMPLETED, "cancel"),
            (CampaignStatus.CANCELLED, "cancel"),
            (CampaignStatus.SENDING, "update_details"),
            (CampaignStatus.SCHEDULED, "update_target_segment"),
        ],
    )
    def test_rejected_transition_leaves_state_unchanged(
        self, make_campaign, clock, vip_segment, status, action
    ):
        campaign = make_campaign()
        _drive_to(campaign, status, clock)
        before = _snapshot(campaign)

        calls = {
            "schedule": lambda: campaign.schedule(clock.now() + timedelta(days=2), clock),
            "launch": lambda: campaign.launch(5, clock),
            "pause": lambda: campaign.pause(clock),
            "resume": lambda: campaign.resume(clock),
            "complete": lambda: campaign.complete(clock),
            "cancel": lambda: campaign.cancel(clock),
            "update_details": lambda: campaign.update_details(clock, template="New {{x}}"),
            "update_target_segment": lambda: campaign.update_target_segment(vip_segment, clock),
        }
        with pytest.raises(InvariantViolationException):
            calls[action]()

        assert _snapshot(campaign) == before

    def test_pause_resume_complete(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.launch(50, clock)
        campaign.pause(clock)
        assert campaign.status == CampaignStatus.PAUSED

        campaign.resume(clock)
        clock.advance(hours=3)
        campaign.record_metrics(clock, total_sent=50, delivered=48, opened=20)
        campaign.complete(clock)

        assert campaign.status == CampaignStatus.COMPLETED
        assert campaign.duration(clock.now()) == timedelta(hours=3)
        completed = campaign.pending_events[-1]
        assert isinstance(completed, CampaignCompleted)
        assert (completed.total_sent, completed.delivered, completed.opened) == (50, 48, 20)

    def test_schedule_then_launch(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.schedule(NOW + timedelta(days=1), clock)

        assert campaign.status == CampaignStatus.SCHEDULED
        assert campaign.is_overdue(NOW + timedelta(days=2)) is True

        campaign.launch(10, clock)
        assert campaign.status == CampaignStatus.SENDING

    def test_cancel_from_draft(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.cancel(clock)

        assert campaign.status == CampaignStatus.CANCELLED
        assert campaign.end_date == NOW


class TestCampaignMetrics:
    def test_metrics_never_decrease(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.record_metrics(clock, total_sent=100, delivered=90)

        with pytest.raises(InvariantViolationException):
            campaign.record_metrics(clock, delivered=80)
        assert campaign.metrics.delivered == 90

    def test_increment_metric(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.increment_metric("opened", clock, amount=3)
        campaign.increment_metric("opened", clock)

        assert campaign.metrics.opened == 4

    def test_rates(self, make_campaign, clock):
        campaign = make_campaign()
        campaign.record_metrics(
            clock, total_sent=200, delivered=100, opened=50, clicked=10, converted=5
        )

        assert campaign.delivery_rate == 50.0
        assert campaign.open_rate == 50.0
        assert campaign.click_rate == 20.0
        assert campaign.conversion_rate == 5.0

    def test_rates_with_no_sends(self, make_campaign):
        assert make_campaign().delivery_rate == 0.0


class TestCampaignTemplates:
    def test_render_with_all_placeholders_leaves_no_tokens(self, make_campaign):
        campaign = make_campaign(variables={"discount": "20%"})

        rendered = campaign.render_template({"first_name": "Ana"})

        assert rendered == "Hi Ana, enjoy 20% off!"
        assert "{{" not in rendered

    def test_render_with_one_missing_placeholder_keeps_exactly_that_token(self, make_campaign):
        campaign = make_campaign(variables={"discount": "20%"})

        rendered = campaign.render_template({})

        assert rendered == "Hi {{first_name}}, enjoy 20% off!"

    def test_recipient_data_overrides_campaign_variables(self, make_campaign):
        campaign = make_campaign(template="{{greeting}} {{name}}", variables={"greeting": "Hello"})

        assert campaign.render_template({"greeting": "Hey", "name": "Bo"}) == "Hey Bo"

    def test_render_values(self, make_campaign):
        campaign = make_campaign(template="{{vip}} {{count}} {{tags}}")

        rendered = campaign.render_template({"vip": True, "count": 3, "tags": ["a", "b"]})

        assert rendered == 'true 3 ["a","b"]'

    def test_validate_template(self, make_campaign):
        assert make_campaign().validate_template("Hi {{name}}", {"name": "x"}) is True
        assert make_campaign().validate_template("Hi {{name}}", {}) is False
        assert make_campaign().validate_template("   ", {}) is False

    def test_update_details_in_draft(self, make_campaign, clock):
        campaign = make_campaign()
        clock.advance(minutes=5)

        campaign.update_details(clock, name="Summer Promo", template="Hello {{first_name}}")

        assert campaign.name == "Summer Promo"
        assert campaign.template == "Hello {{first_name}}"
        assert campaign.updated_at == NOW + timedelta(minutes=5)

    def test_update_segment_in_draft(self, make_campaign, clock):
        campaign = make_campaign()
        segment = Segment(
            conditions=(
                SegmentCondition("visits", "greater_than", 3),
                SegmentCondition("city", "equals", "Kampala"),
            ),
            logic="OR",
        )

        campaign.update_target_segment(segment, clock)

        assert campaign.target_segment.logic.value == "OR"
        assert len(campaign.target_segment.conditions) == 2
