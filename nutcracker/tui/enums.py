from enum import Enum

from nutcracker.cleaner import CleanStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


CLEAN_STATUS_STYLE = {
    CleanStatus.CLEANED: UIStyle.GREEN.value,
    CleanStatus.UNCHANGED: UIStyle.DIM.value,
    CleanStatus.NO_PARAMS: UIStyle.DIM.value,
    CleanStatus.INVALID_URL: UIStyle.RED.value,
}
