from enum import Enum
from typing import NamedTuple


class Verdict(Enum):
    SAFE = "safe"
    UNSAFE_REPROJECT_RECOMMENDED = "unsafe_reproject_recommended"
    UNSAFE_SPHERICAL_RECOMMENDED = "unsafe_spherical_recommended"


class ReasonCode(Enum):
    """Why an advisor reached its verdict."""

    NO_CRS_DECLARED = "no_crs_declared"
    PLANAR_DEGREE_UNITS = "planar_degree_units"
    SPHERICAL_ENGINE_COMPENSATES = "spherical_engine_compensates"
    TOPOLOGY_CRS_INVARIANT = "topology_crs_invariant"
    PROJECTED_LINEAR_UNITS = "projected_linear_units"
    LARGE_EXTENT_DISTORTION = "large_extent_distortion"
    UNSPECIFIED_LINEAR_UNITS = "unspecified_linear_units"


REASON_MESSAGES = {
    ReasonCode.NO_CRS_DECLARED: "no CRS declared; operation assumes planar units of unknown meaning",
    ReasonCode.PLANAR_DEGREE_UNITS: "geographic CRS in degrees; planar computation would treat degrees as distances",
    ReasonCode.SPHERICAL_ENGINE_COMPENSATES: "spherical engine compensates for degree units",
    ReasonCode.TOPOLOGY_CRS_INVARIANT: "topological predicates are CRS-invariant",
    ReasonCode.PROJECTED_LINEAR_UNITS: "projected CRS with linear units",
    ReasonCode.LARGE_EXTENT_DISTORTION: "projected CRS accuracy degrades over large extents",
    ReasonCode.UNSPECIFIED_LINEAR_UNITS: "projected CRS without a declared unit; distances have unknown meaning",
}


class AdvisoryVerdict(NamedTuple):
    """
    The answer of an advisor: a verdict and the reason it was reached.

    Attributes:
        verdict: SAFE, UNSAFE_REPROJECT_RECOMMENDED or UNSAFE_SPHERICAL_RECOMMENDED
        reason: The code explaining the verdict

    Examples:
        >>> v = AdvisoryVerdict(Verdict.SAFE, ReasonCode.TOPOLOGY_CRS_INVARIANT)
        >>> v.is_safe
        True
        >>> v.message
        'topological predicates are CRS-invariant'
    """

    verdict: Verdict
    reason: ReasonCode

    def __str__(self):
        return f"{self.verdict.name}: {self.message}"

    @property
    def is_safe(self) -> bool:
        return self.verdict is Verdict.SAFE

    @property
    def message(self) -> str:
        return REASON_MESSAGES[self.reason]
