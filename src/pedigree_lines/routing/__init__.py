"""Connection-line routing subpackage.

Public API:
- build_corner / corner_at: Rounded corner geometry
- CrossingAwareLineDrawer / DrawLog: Straight and curved lines with crossing marks
- PartnerPathRouter: Junction-to-partner lines
- ChildFanoutBuilder: Junction-to-children fan-out
"""

from pedigree_lines.routing.children import ChildFanoutBuilder, Fanout, TwinGroup
from pedigree_lines.routing.corners import Corner, build_corner, corner_at
from pedigree_lines.routing.crossings import CrossingAwareLineDrawer, DrawLog, Segment
from pedigree_lines.routing.partners import PartnerPathRouter, last_bend_distance

__all__ = [
    "ChildFanoutBuilder",
    "Corner",
    "CrossingAwareLineDrawer",
    "DrawLog",
    "Fanout",
    "PartnerPathRouter",
    "Segment",
    "TwinGroup",
    "build_corner",
    "corner_at",
    "last_bend_distance",
]
