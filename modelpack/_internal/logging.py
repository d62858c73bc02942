import logging
import traceback
import typing as t
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

from modelpack.exceptions import ModelpackException

if t.TYPE_CHECKING:
    from types import TracebackType

FORMAT = "%(message)s"

# Keep stdout for command output
_console = Console(stderr=True)


def _build_handler(level: str) -> RichHandler:
    return RichHandler(
        level=level, console=_console, show_level=False, show_path=False, show_time=False
    )


logging.basicConfig(
    level="INFO",
    format=FORMAT,
    datefmt="[%X]",
    handlers=[_build_handler("INFO")],
)
logger = logging.getLogger("modelpack")


def init_logger(level: str):
    global logger

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=level,
        format=FORMAT,
        datefmt="[%X]",
        handlers=[_build_handler(level)],
    )
    logger = logging.getLogger("modelpack")
    logger.setLevel(level)


def log_info(msg: str, pretty: bool = True):
    extras: Dict[str, Any] = {"markup": pretty}
    if not pretty:
        extras["highlighter"] = None
    logger.info(msg, extra=extras)


def log_debug(msg: str, pretty: bool = True):
    extras: Dict[str, Any] = {"markup": pretty}
    if not pretty:
        extras["highlighter"] = None
    logger.debug(msg, extra=extras)


def log_warning(msg: str, format: bool = True, pretty: bool = True):
    if format:
        if pretty:
            msg = "[bold yellow]Warning:[/bold yellow] " + msg
        else:
            msg = "Warning: " + msg

    extras: Dict[str, Any] = {"markup": pretty}
    if not pretty:
        extras["highlighter"] = None

    logger.warning(msg, extra=extras)


def log_exception(
    exctype: t.Type[BaseException],
    exc: BaseException,
    tb: "TracebackType",
    show_modelpack_exc_tb: bool,
):
    logger.error("")
    if not isinstance(exc, ModelpackException) or show_modelpack_exc_tb:
        logger.error("Traceback:")
        formatted_tb = "".join(traceback.format_tb(tb))
        logger.error(formatted_tb, extra={"markup": False, "highlighter": None})

    displayed_cls_name = (
        exctype.__name__
        if exctype.__module__ == "builtins" or isinstance(exc, ModelpackException)
        else f"{exctype.__module__}.{exctype.__name__}"
    )
    exc_msg = str(exc)
    exc_info_str = f"[bold red]{displayed_cls_name}[/bold red]"
    if exc_msg:
        exc_info_str += ": " + exc_msg
    logger.error(exc_info_str, extra={"markup": True, "highlighter": None})
