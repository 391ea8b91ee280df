from geoadvisor.advisors.safety_advisor import SafetyAdvisor, advise
from geoadvisor.classifiers.crs_classifier import classify
from geoadvisor.constructs.coordinate import Coordinate
from geoadvisor.constructs.crs_descriptor import CRSDescriptor, CRSKind, Unit
from geoadvisor.constructs.extent import Extent
from geoadvisor.constructs.operation import OperationKind, OperationRequest
from geoadvisor.constructs.verdict import AdvisoryVerdict, ReasonCode, Verdict
from geoadvisor.selectors.utm_selector import UTMSelection, select_utm
from geoadvisor.utils.exceptions import (
    GeoAdvisorException,
    InvalidCoordinateError,
    MalformedCRSError,
    UnsupportedOperationKindError,
)

__all__ = [
    "AdvisoryVerdict",
    "CRSDescriptor",
    "CRSKind",
    "Coordinate",
    "Extent",
    "GeoAdvisorException",
    "InvalidCoordinateError",
    "MalformedCRSError",
    "OperationKind",
    "OperationRequest",
    "ReasonCode",
    "SafetyAdvisor",
    "UTMSelection",
    "UnsupportedOperationKindError",
    "Unit",
    "Verdict",
    "advise",
    "classify",
    "select_utm",
]
