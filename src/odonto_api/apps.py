from django.apps import AppConfig


class OdontoApiConfig(AppConfig):
    name = "odonto_api"
    verbose_name = "Odonto Gestão API"

    def ready(self):
        from django.conf import settings

        # ─── DI containers ──────────────────────────────────────────
        from appointment_scheduling.adapters.config.composition_root import (
            setup_di_container_from_settings as build_scheduling_container,
        )
        from commission_billing.adapters.config.composition_root import (
            setup_di_container_from_settings as build_billing_container,
        )
        from odonto_core.adapters.config.composition_root import (
            setup_di_container_from_settings as build_core_container,
        )

        build_core_container(settings)
        build_scheduling_container(settings)
        build_billing_container(settings)
