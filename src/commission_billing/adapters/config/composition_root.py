from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):
    """Inicializa o DI container financeiro após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    import structlog

    from commission_billing.adapters.repositories.attendance_source_repo_impl import AttendanceSourceRepoImpl
    from commission_billing.adapters.repositories.payment_source_repo_impl import PaymentSourceRepoImpl
    from commission_billing.core.application.handlers.financial_query_handlers import (
        GetDentistFinancialReportHandler,
    )
    from commission_billing.core.application.queries.financial_queries import GetDentistFinancialReportQuery
    from commission_billing.core.application.services.financial_report_service import FinancialReportService
    from commission_billing.core.application.services.financial_sources import (
        AttendanceProcedureSource,
        TreatmentPlanPaymentSource,
    )
    from odonto_core.adapters.config.composition_root import (
        setup_di_container_from_settings as setup_core_container,
    )
    from odonto_core.core.application.cqrs import QueryBus

    core = setup_core_container(settings)

    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        logger    = providers.Singleton(structlog.get_logger)
        query_bus = providers.Singleton(QueryBus)

        # Repositórios
        dentist_repo    = providers.Object(core.dentist_repo())
        payment_repo    = providers.Singleton(PaymentSourceRepoImpl)
        attendance_repo = providers.Singleton(AttendanceSourceRepoImpl)

        # Fontes (uma por origem) + agregador
        plan_source       = providers.Singleton(TreatmentPlanPaymentSource, repo=payment_repo)
        attendance_source = providers.Singleton(
            AttendanceProcedureSource, repo=attendance_repo, payment_repo=payment_repo
        )
        report_service    = providers.Singleton(
            FinancialReportService,
            dentist_repo=dentist_repo,
            plan_source=plan_source,
            attendance_source=attendance_source,
            time_zone=config.time_zone,
        )

        financial_report_handler = providers.Factory(
            GetDentistFinancialReportHandler, report_service=report_service
        )

        def init(self):
            qry_bus = self.query_bus()
            qry_bus.register(GetDentistFinancialReportQuery, self.financial_report_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.time_zone.from_value(settings.TIME_ZONE)
    Container.init(container)
    return container
