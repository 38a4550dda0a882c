# ABOUTME: Services module initialization.
# ABOUTME: Exports submission handling, asset origin access, and affiliate tag injection.

from trifecta_edge.services.affiliate import inject_affiliate_tag
from trifecta_edge.services.asset_origin import AssetOrigin
from trifecta_edge.services.subscription_service import SubscriptionService

__all__ = [
    "AssetOrigin",
    "SubscriptionService",
    "inject_affiliate_tag",
]
