from enum import Enum

from agent_sync.models import DeployResult


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


DEPLOY_RESULT_STYLE = {
    DeployResult.DEPLOYED: UIStyle.GREEN.value,
    DeployResult.SKIPPED_USER_OWNED: UIStyle.YELLOW.value,
    DeployResult.SKIPPED_TEMPLATE: UIStyle.DIM.value,
    DeployResult.SKIPPED_NO_NAME: UIStyle.DIM.value,
}

DEPLOY_RESULT_LABEL = {
    DeployResult.DEPLOYED: "deployed",
    DeployResult.SKIPPED_USER_OWNED: "user-owned",
    DeployResult.SKIPPED_TEMPLATE: "template",
    DeployResult.SKIPPED_NO_NAME: "no name",
}
