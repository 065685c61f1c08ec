import os

APP_TITLE = os.environ.get("APP_TITLE", "Calendário Pagamento")
ORG_NAME = os.environ.get("ORG_NAME", "Prefeitura de Inajá")

# calendario-pagamento-inaja-dezembro-2024.pdf
EXPORT_PREFIX = os.environ.get("EXPORT_PREFIX", "calendario-pagamento-inaja")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
