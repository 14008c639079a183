"""Wire models for the resource areas the SDK covers."""

from .catalog import *  # noqa: F401, F403
from .checkout import *  # noqa: F401, F403
from .common import Address, Error, Money, SquareResponse  # noqa: F401
from .customers import *  # noqa: F401, F403
from .inventory import *  # noqa: F401, F403
from .locations import *  # noqa: F401, F403
from .orders import *  # noqa: F401, F403
from .payments import *  # noqa: F401, F403
from .transactions import *  # noqa: F401, F403
