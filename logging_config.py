"""
Sets up logging for the tiling modules.
"""


import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
	"""
	Configures the root logger, which all of the tiling modules log to.

	Log records are written to stdout and, if log_file is specified, to
	that file (overwriting it). Any existing handlers are removed first,
	so calling this more than once doesn't duplicate output.
	"""
	logger = logging.getLogger()
	logger.setLevel(level)
	if logger.hasHandlers():
		logger.handlers.clear()

	formatter = logging.Formatter(
		"%(asctime)s - %(name)s - %(levelname)s - %(message)s",
		datefmt="%H:%M:%S"
	)

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setLevel(level)
	console_handler.setFormatter(formatter)
	logger.addHandler(console_handler)

	if log_file:
		file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
		file_handler.setLevel(level)
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)

	logger.info("Logging initialized.")
