from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):
    """Inicializa o DI container da agenda após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    import structlog

    from appointment_scheduling.adapters.repositories.appointment_repo_impl import AppointmentRepoImpl

    # Commands
    from appointment_scheduling.core.application.commands.appointment_commands import (
        BookAppointmentCommand,
        CancelAppointmentCommand,
        UpdateAppointmentCommand,
    )

    # Handlers
    from appointment_scheduling.core.application.handlers.appointment_handlers import (
        BookAppointmentHandler,
        CancelAppointmentHandler,
        UpdateAppointmentHandler,
    )
    from appointment_scheduling.core.application.handlers.appointment_query_handlers import (
        CheckScheduleConflictHandler,
        GetAppointmentHandler,
        ListAppointmentsHandler,
    )

    # Queries
    from appointment_scheduling.core.application.queries.appointment_queries import (
        CheckScheduleConflictQuery,
        GetAppointmentQuery,
        ListAppointmentsQuery,
    )
    from appointment_scheduling.core.application.services.appointment_service import AppointmentService
    from appointment_scheduling.core.application.services.reference_validator import ReferenceValidator
    from appointment_scheduling.core.domain.services.conflict_checker import ConflictChecker
    from odonto_core.adapters.config.composition_root import (
        setup_di_container_from_settings as setup_core_container,
    )
    from odonto_core.core.application.cqrs import CommandBus, QueryBus

    core = setup_core_container(settings)

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        logger      = providers.Singleton(structlog.get_logger)

        # CQRS
        command_bus = providers.Singleton(CommandBus)
        query_bus   = providers.Singleton(QueryBus)

        # Repositórios
        appointment_repo = providers.Singleton(AppointmentRepoImpl)
        dentist_repo     = providers.Object(core.dentist_repo())
        patient_repo     = providers.Object(core.patient_repo())
        procedure_repo   = providers.Object(core.procedure_repo())

        # Serviços de domínio
        conflict_checker = providers.Singleton(
            ConflictChecker,
            appointment_repo=appointment_repo,
            time_zone=config.time_zone,
        )
        reference_validator = providers.Singleton(
            ReferenceValidator,
            dentist_repo=dentist_repo,
            patient_repo=patient_repo,
            procedure_repo=procedure_repo,
        )

        # Handlers (comandos)
        book_appointment_handler   = providers.Factory(
            BookAppointmentHandler,
            repo=appointment_repo,
            validator=reference_validator,
            conflict_checker=conflict_checker,
        )
        update_appointment_handler = providers.Factory(
            UpdateAppointmentHandler,
            repo=appointment_repo,
            validator=reference_validator,
            conflict_checker=conflict_checker,
        )
        cancel_appointment_handler = providers.Factory(CancelAppointmentHandler, repo=appointment_repo)

        # Handlers (queries)
        get_appointment_handler    = providers.Factory(GetAppointmentHandler, repo=appointment_repo)
        list_appointments_handler  = providers.Factory(
            ListAppointmentsHandler, repo=appointment_repo, time_zone=config.time_zone
        )
        check_conflict_handler     = providers.Factory(
            CheckScheduleConflictHandler, conflict_checker=conflict_checker
        )

        # Fachada
        appointment_service = providers.Singleton(
            AppointmentService,
            command_bus=command_bus,
            query_bus=query_bus,
        )

        def init(self):
            cmd_bus = self.command_bus()
            cmd_bus.register(BookAppointmentCommand, self.book_appointment_handler())
            cmd_bus.register(UpdateAppointmentCommand, self.update_appointment_handler())
            cmd_bus.register(CancelAppointmentCommand, self.cancel_appointment_handler())

            qry_bus = self.query_bus()
            qry_bus.register(GetAppointmentQuery, self.get_appointment_handler())
            qry_bus.register(ListAppointmentsQuery, self.list_appointments_handler())
            qry_bus.register(CheckScheduleConflictQuery, self.check_conflict_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.time_zone.from_value(settings.TIME_ZONE)
    Container.init(container)
    return container
