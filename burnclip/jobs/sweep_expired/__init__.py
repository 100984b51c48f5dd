from burnclip.utils import initialize_logging


initialize_logging()
