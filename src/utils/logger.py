import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_logger(name: str = "src", log_path: Optional[Union[str, Path]] = None):
    # Module loggers live under "src.*", so configuring "src" covers the pipeline.
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handlers = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    if not stream_handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    if log_path is not None:
        log_path = Path(log_path)
        target = str(log_path.absolute())

        # Each run logs to its own output root; drop a previous run's file
        for h in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
            if h.baseFilename != target:
                logger.removeHandler(h)
                h.close()

        if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
