"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 50
DEFAULT_CHUNK_SIZE = 200
DEFAULT_BASE_FOLDER = "barcodes"
DEFAULT_SLEEP_SECONDS = 2

DEFAULT_MAIL_SUBJECT = "Material del evento"
DEFAULT_MAIL_BODY = "Hola, adjuntamos los codigos de su iglesia."
ATTACHMENT_FILENAME = "material.zip"
ATTACHMENT_MIME = "application/zip"

DISTRICT_PLACEHOLDER = "sin-distrito"
CHURCH_PLACEHOLDER = "sin-iglesia"
NAME_PLACEHOLDER = "inscrito"

# Observed behaviour: EXIT stamps `salida` and also clears `entrada`, closing the whole cycle.
EXIT_CLEARS_ENTRANCE = True
