import logging
import os


def configure_logging(log_file_path, log_level, append_to_log=False):
    if log_file_path is None:
        return
    if not append_to_log:
        if os.path.exists(log_file_path):
            os.remove(log_file_path)
    loglevel = getattr(logging, log_level.upper())
    handler = logging.FileHandler(log_file_path)
    handler.setLevel(loglevel)
    root = logging.getLogger()
    root.addHandler(handler)
    if root.level > loglevel or root.level == logging.NOTSET:
        root.setLevel(loglevel)
