"""
Interactive run options prompt.

Asks for the three run options before any track is touched. Blank answers
keep the shown default; 'q', EOF or Ctrl-C cancel the run.
"""
import logging
from typing import Callable, Optional

from .config_loader import RunOptions
from .errors import ConfigInvalid, DialogCancelled

logger = logging.getLogger(__name__)

INTRO = (
    "GenreFixer adds descriptive metadata to your music. These descriptive "
    "tags are gathered from the Last.FM API (no user account necessary) and "
    "then written into the 'Grouping' field of your music file(s)."
)
GROUPING_WARNING = (
    "NOTE: The 'Grouping' field is typically unused and therefore empty, but "
    "be sure nothing important is in this field for the selected songs "
    "before running. If anything is in the field it will be overwritten."
)

_CANCEL = 'q'


def _ask(input_fn: Callable[[str], str], prompt: str) -> str:
    try:
        answer = input_fn(prompt)
    except (EOFError, KeyboardInterrupt):
        raise DialogCancelled("Prompt closed")
    answer = (answer or '').strip()
    if answer.lower() == _CANCEL:
        raise DialogCancelled("Cancelled by user")
    return answer


def _ask_yes_no(input_fn: Callable[[str], str], prompt: str, default: bool) -> bool:
    hint = 'Y/n' if default else 'y/N'
    answer = _ask(input_fn, f"{prompt} [{hint}]: ").lower()
    if not answer:
        return default
    if answer in ('y', 'yes'):
        return True
    if answer in ('n', 'no'):
        return False
    raise ConfigInvalid(f"Expected y or n, got {answer!r}")


def _ask_int(input_fn: Callable[[str], str], prompt: str, default: int) -> int:
    answer = _ask(input_fn, f"{prompt} [{default}]: ")
    if not answer:
        return default
    try:
        value = int(answer)
    except ValueError:
        raise ConfigInvalid(f"{prompt} must be an integer, got {answer!r}")
    if value < 0:
        raise ConfigInvalid(f"{prompt} must not be negative, got {value}")
    return value


def prompt_run_options(
    defaults: Optional[RunOptions] = None,
    input_fn: Callable[[str], str] = input,
) -> RunOptions:
    """
    Ask the user for run options.

    Args:
        defaults: Values shown and kept on blank answers
        input_fn: Line reader, replaced in tests

    Returns:
        Confirmed RunOptions

    Raises:
        DialogCancelled: user quit or declined to start
        ConfigInvalid: a numeric answer was not a non-negative integer
    """
    defaults = defaults or RunOptions()
    logger.info(INTRO)
    logger.info("Select songs to tag (files or folders) and confirm below. Enter 'q' to cancel.")

    set_genre = _ask_yes_no(input_fn, "Set the Genre field?", defaults.set_genre)
    min_scrobs = _ask_int(input_fn, "Minimum popularity of tag (Integer)", defaults.min_scrobs)
    max_tags = _ask_int(input_fn, "Maximum tags to save (Integer)", defaults.max_tags)

    logger.warning(GROUPING_WARNING)
    if not _ask_yes_no(input_fn, "Get Tags!", True):
        raise DialogCancelled("Run not confirmed")

    return RunOptions(max_tags=max_tags, min_scrobs=min_scrobs, set_genre=set_genre)
