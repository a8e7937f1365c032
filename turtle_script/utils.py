import logging

logger: logging.Logger = logging.getLogger("turtle_script")
logger.addHandler(logging.StreamHandler())
# Silent by default; callers lower the level to see parse/run traces
logger.setLevel(logging.CRITICAL)
