import logging

import colorama

LEVEL_COLOURS = {
    logging.DEBUG: colorama.Fore.CYAN,
    logging.INFO: colorama.Fore.GREEN,
    logging.WARNING: colorama.Fore.YELLOW,
    logging.ERROR: colorama.Fore.RED,
    logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT,
}


class ColourFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        colour = LEVEL_COLOURS.get(record.levelno, "")
        return f"{colour}{message}{colorama.Style.RESET_ALL}" if colour else message


def setup_logging(verbose: bool = False) -> None:
    """Setup logging for the command line.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    colorama.just_fix_windows_console()

    handler = logging.StreamHandler()
    handler.setFormatter(ColourFormatter("[%(name)s] [%(levelname)s] %(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[handler],
        force=True,
    )
