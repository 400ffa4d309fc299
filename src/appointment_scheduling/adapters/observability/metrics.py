from prometheus_client import Counter, Histogram

# registro padrão do prometheus_client, exportado pelo django-prometheus em /metrics

APPOINTMENT_BOOKINGS = Counter(
    "appointment_bookings_total",
    "Tentativas de agendamento por resultado",
    ["outcome"],
)

APPOINTMENT_CONFLICTS = Counter(
    "appointment_conflicts_total",
    "Agendamentos/remarcações recusados por conflito de horário",
)

CONFLICT_CHECK_DURATION = Histogram(
    "appointment_conflict_check_duration_seconds",
    "Duração da checagem de conflito (leitura da agenda + sobreposição)",
)
