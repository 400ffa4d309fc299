from prometheus_client import Counter, Histogram

# registro padrão do prometheus_client, exportado pelo django-prometheus em /metrics

FINANCIAL_REPORT_DURATION = Histogram(
    "financial_report_duration_seconds",
    "Tempo de montagem do relatório financeiro do dentista",
)

FINANCIAL_TRANSACTIONS = Counter(
    "financial_report_transactions_total",
    "Transações geradas nos relatórios financeiros",
    ["source", "status"],
)
