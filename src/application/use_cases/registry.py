"""
Handler wiring.

``build_dispatcher`` registers every command and query handler of the four
contexts and verifies the table against the message catalogue below.
"""

from src.application.cqrs.dispatcher import Dispatcher
from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.repositories import (ICampaignRepository,
                                                     IDashboardRepository,
                                                     IReportRepository,
                                                     ITenantRepository)
from src.application.use_cases.campaigns import commands as campaign_commands
from src.application.use_cases.campaigns import queries as campaign_queries
from src.application.use_cases.dashboards import commands as dashboard_commands
from src.application.use_cases.dashboards import queries as dashboard_queries
from src.application.use_cases.reports import commands as report_commands
from src.application.use_cases.reports import queries as report_queries
from src.application.use_cases.tenants import commands as tenant_commands
from src.application.use_cases.tenants import queries as tenant_queries
from src.infrastructure.config.settings import Settings
from src.shared.clock import Clock, system_clock

COMMAND_TYPES = (
    tenant_commands.CreateTenant,
    tenant_commands.UpdateTenantProfile,
    tenant_commands.ChangeTenantStatus,
    tenant_commands.UpdateTenantSubscription,
    tenant_commands.ExtendTenantTrial,
    tenant_commands.UpdateTenantSettings,
    tenant_commands.AddTenantFeature,
    tenant_commands.RemoveTenantFeature,
    campaign_commands.CreateCampaign,
    campaign_commands.UpdateCampaignDetails,
    campaign_commands.UpdateCampaignSegment,
    campaign_commands.ScheduleCampaign,
    campaign_commands.LaunchCampaign,
    campaign_commands.PauseCampaign,
    campaign_commands.ResumeCampaign,
    campaign_commands.CompleteCampaign,
    campaign_commands.CancelCampaign,
    campaign_commands.RecordCampaignMetrics,
    campaign_commands.DeleteCampaign,
    report_commands.CreateReport,
    report_commands.UpdateReportDetails,
    report_commands.UpdateReportSchedule,
    report_commands.PauseReportSchedule,
    report_commands.ResumeReportSchedule,
    report_commands.StartReportGeneration,
    report_commands.CompleteReportGeneration,
    report_commands.FailReportGeneration,
    report_commands.DeleteReport,
    dashboard_commands.CreateDashboard,
    dashboard_commands.AddDashboardWidget,
    dashboard_commands.UpdateDashboardWidget,
    dashboard_commands.RemoveDashboardWidget,
    dashboard_commands.ReorderDashboardWidgets,
    dashboard_commands.SetDefaultDashboard,
    dashboard_commands.DeleteDashboard,
)

QUERY_TYPES = (
    tenant_queries.GetTenant,
    tenant_queries.GetTenantBySlug,
    tenant_queries.GetTenantByEmail,
    tenant_queries.GetTenantByDomain,
    tenant_queries.ListTenants,
    campaign_queries.GetCampaign,
    campaign_queries.ListCampaigns,
    campaign_queries.PreviewCampaignMessage,
    campaign_queries.CheckCampaignTemplate,
    report_queries.GetReport,
    report_queries.ListReports,
    report_queries.ListDueReports,
    dashboard_queries.GetDashboard,
    dashboard_queries.ListDashboards,
    dashboard_queries.GetDefaultDashboard,
)


def build_dispatcher(
    *,
    tenants: ITenantRepository,
    campaigns: ICampaignRepository,
    reports: IReportRepository,
    dashboards: IDashboardRepository,
    publisher: IDomainEventPublisher,
    clock: Clock = system_clock,
    settings: Settings | None = None,
) -> Dispatcher:
    """
    Wire all handlers into a new dispatcher.

    Raises:
        DispatchMisconfigurationException: a message type has no handler
    """
    dispatcher = Dispatcher()
    command = dispatcher.register_command
    query = dispatcher.register_query

    # Tenants
    command(
        tenant_commands.CreateTenant,
        tenant_commands.CreateTenantHandler(tenants, publisher, clock, settings),
    )
    for command_type, handler_type in (
        (tenant_commands.UpdateTenantProfile, tenant_commands.UpdateTenantProfileHandler),
        (tenant_commands.ChangeTenantStatus, tenant_commands.ChangeTenantStatusHandler),
        (
            tenant_commands.UpdateTenantSubscription,
            tenant_commands.UpdateTenantSubscriptionHandler,
        ),
        (tenant_commands.ExtendTenantTrial, tenant_commands.ExtendTenantTrialHandler),
        (tenant_commands.UpdateTenantSettings, tenant_commands.UpdateTenantSettingsHandler),
        (tenant_commands.AddTenantFeature, tenant_commands.AddTenantFeatureHandler),
        (tenant_commands.RemoveTenantFeature, tenant_commands.RemoveTenantFeatureHandler),
    ):
        command(command_type, handler_type(tenants, publisher, clock))
    query(tenant_queries.GetTenant, tenant_queries.GetTenantHandler(tenants))
    query(tenant_queries.GetTenantBySlug, tenant_queries.GetTenantBySlugHandler(tenants))
    query(tenant_queries.GetTenantByEmail, tenant_queries.GetTenantByEmailHandler(tenants))
    query(tenant_queries.GetTenantByDomain, tenant_queries.GetTenantByDomainHandler(tenants))
    query(tenant_queries.ListTenants, tenant_queries.ListTenantsHandler(tenants))

    # Campaigns
    for command_type, handler_type in (
        (campaign_commands.CreateCampaign, campaign_commands.CreateCampaignHandler),
        (campaign_commands.UpdateCampaignDetails, campaign_commands.UpdateCampaignDetailsHandler),
        (campaign_commands.UpdateCampaignSegment, campaign_commands.UpdateCampaignSegmentHandler),
        (campaign_commands.ScheduleCampaign, campaign_commands.ScheduleCampaignHandler),
        (campaign_commands.LaunchCampaign, campaign_commands.LaunchCampaignHandler),
        (campaign_commands.PauseCampaign, campaign_commands.PauseCampaignHandler),
        (campaign_commands.ResumeCampaign, campaign_commands.ResumeCampaignHandler),
        (campaign_commands.CompleteCampaign, campaign_commands.CompleteCampaignHandler),
        (campaign_commands.CancelCampaign, campaign_commands.CancelCampaignHandler),
        (campaign_commands.RecordCampaignMetrics, campaign_commands.RecordCampaignMetricsHandler),
        (campaign_commands.DeleteCampaign, campaign_commands.DeleteCampaignHandler),
    ):
        command(command_type, handler_type(campaigns, publisher, clock))
    query(campaign_queries.GetCampaign, campaign_queries.GetCampaignHandler(campaigns))
    query(campaign_queries.ListCampaigns, campaign_queries.ListCampaignsHandler(campaigns))
    query(
        campaign_queries.PreviewCampaignMessage,
        campaign_queries.PreviewCampaignMessageHandler(campaigns),
    )
    query(campaign_queries.CheckCampaignTemplate, campaign_queries.CheckCampaignTemplateHandler())

    # Reports
    for command_type, handler_type in (
        (report_commands.CreateReport, report_commands.CreateReportHandler),
        (report_commands.UpdateReportDetails, report_commands.UpdateReportDetailsHandler),
        (report_commands.UpdateReportSchedule, report_commands.UpdateReportScheduleHandler),
        (report_commands.PauseReportSchedule, report_commands.PauseReportScheduleHandler),
        (report_commands.ResumeReportSchedule, report_commands.ResumeReportScheduleHandler),
        (report_commands.StartReportGeneration, report_commands.StartReportGenerationHandler),
        (
            report_commands.CompleteReportGeneration,
            report_commands.CompleteReportGenerationHandler,
        ),
        (report_commands.FailReportGeneration, report_commands.FailReportGenerationHandler),
        (report_commands.DeleteReport, report_commands.DeleteReportHandler),
    ):
        command(command_type, handler_type(reports, publisher, clock))
    query(report_queries.GetReport, report_queries.GetReportHandler(reports))
    query(report_queries.ListReports, report_queries.ListReportsHandler(reports))
    query(report_queries.ListDueReports, report_queries.ListDueReportsHandler(reports, clock))

    # Dashboards
    for command_type, handler_type in (
        (dashboard_commands.CreateDashboard, dashboard_commands.CreateDashboardHandler),
        (dashboard_commands.AddDashboardWidget, dashboard_commands.AddDashboardWidgetHandler),
        (
            dashboard_commands.UpdateDashboardWidget,
            dashboard_commands.UpdateDashboardWidgetHandler,
        ),
        (
            dashboard_commands.RemoveDashboardWidget,
            dashboard_commands.RemoveDashboardWidgetHandler,
        ),
        (
            dashboard_commands.ReorderDashboardWidgets,
            dashboard_commands.ReorderDashboardWidgetsHandler,
        ),
        (dashboard_commands.SetDefaultDashboard, dashboard_commands.SetDefaultDashboardHandler),
        (dashboard_commands.DeleteDashboard, dashboard_commands.DeleteDashboardHandler),
    ):
        command(command_type, handler_type(dashboards, publisher, clock))
    query(dashboard_queries.GetDashboard, dashboard_queries.GetDashboardHandler(dashboards))
    query(dashboard_queries.ListDashboards, dashboard_queries.ListDashboardsHandler(dashboards))
    query(
        dashboard_queries.GetDefaultDashboard,
        dashboard_queries.GetDefaultDashboardHandler(dashboards),
    )

    dispatcher.verify(COMMAND_TYPES, QUERY_TYPES)
    return dispatcher
