"""
Speculative lookahead.

Where the next token alone cannot pick a grammar alternative, the parser
runs the candidate production as a silent trial: the stream position is
marked, errors are not reported, and the stream is rewound whatever the
outcome. Only a successful trial is followed by the real parse.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..errors import ParseError

logger = logging.getLogger(__name__)


class SpeculationMixin:
    """
    Mixin providing bounded backtracking.

    Productions must not mutate shared state (the package descriptor) while
    ``self.speculating`` is true; they build and return descriptors instead.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        backtracking: int

    def speculate(self, production: Callable[[], object], description: str = "") -> bool:
        """
        Try ``production`` silently and report whether it would succeed.

        Trials may nest. The stream is always rewound to where the trial began.
        """
        marker = self.stream.mark()
        self.backtracking += 1
        try:
            production()
        except ParseError as e:
            logger.debug(f"Speculation failed: {description or production.__name__}: {e.message}")
            return False
        finally:
            self.backtracking -= 1
            self.stream.rewind(marker)
        return True
