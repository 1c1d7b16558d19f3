from snipurl.utils.logging import initialize_logging


initialize_logging()
