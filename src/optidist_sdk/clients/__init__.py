from .analytics_client import AnalyticsClient
from .auth import AuthClient
from .distribution_client import DistributionClient
from .frames_client import FramesClient
from .sales_client import SalesClient
from .shops_client import ShopsClient

__all__ = [
    "AnalyticsClient",
    "AuthClient",
    "DistributionClient",
    "FramesClient",
    "SalesClient",
    "ShopsClient",
]
