from abc import ABCMeta, abstractmethod
from typing import Iterable, List

from geoadvisor.constructs.operation import OperationRequest
from geoadvisor.constructs.verdict import AdvisoryVerdict


class AdvisorInterface(metaclass=ABCMeta):
    """
    Abstract base class defining the interface for operation advisors.

    An advisor looks at an intended geometric operation and the CRS of its input data,
    and tells whether the result of that operation can be trusted. Advisors never run
    the operation themselves; that is left to a geometry engine such as shapely.

    Examples:
        >>> from geoadvisor.advisors.safety_advisor import SafetyAdvisor
        >>>
        >>> advisor = SafetyAdvisor()
        >>> verdict = advisor.advise(request)
    """

    @abstractmethod
    def advise(self, request: OperationRequest) -> AdvisoryVerdict:
        """
        Judge a single operation request.

        Args:
            request: The operation and the CRS of its input data

        Returns:
            An AdvisoryVerdict with the verdict and the reason for it
        """

    def advise_many(self, requests: Iterable[OperationRequest]) -> List[AdvisoryVerdict]:
        """Judge each request in turn, preserving order."""
        return [self.advise(r) for r in requests]
