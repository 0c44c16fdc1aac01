from user_clustering.steps.expansion import OneHopClusterBuilder, TransitiveClusterBuilder
from user_clustering.steps.ids import ScanOrderIdAssigner
from user_clustering.steps.partners import RangePartnerFinder

__all__ = [
    "RangePartnerFinder",
    "OneHopClusterBuilder",
    "TransitiveClusterBuilder",
    "ScanOrderIdAssigner",
]
