from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):
    """
    Inicializa o container do núcleo compartilhado (lookups de dentista,
    paciente e procedimento) após o Django já estar com settings carregados.
    """
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    import structlog

    from odonto_core.adapters.repositories.dentist_repo_impl import DentistRepoImpl
    from odonto_core.adapters.repositories.patient_repo_impl import PatientRepoImpl
    from odonto_core.adapters.repositories.procedure_repo_impl import ProcedureRepoImpl

    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        logger         = providers.Singleton(structlog.get_logger)

        # Lookups compartilhados pelos contextos
        dentist_repo   = providers.Singleton(DentistRepoImpl)
        patient_repo   = providers.Singleton(PatientRepoImpl)
        procedure_repo = providers.Singleton(ProcedureRepoImpl)

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.time_zone.from_value(settings.TIME_ZONE)
    structlog.get_logger(__name__).info("DI container do núcleo inicializado")
    return container
