"""Base analyzer class for all CFD consumers."""

from abc import ABC, abstractmethod
from typing import Any

from cfd_tlbx.data.cfd import ConditionalFreqDist
from cfd_tlbx.data.views import ResolvedSelection, Selection


class BaseAnalyser(ABC):
    """Abstract base class for components that read a CFD through a selection.

    All analyzers must:
    1. Accept a ConditionalFreqDist and an optional Selection in their constructor
    2. Implement fit() to perform the work and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    The selection is validated in fit(), before any output exists, so a
    malformed request never yields partial results.

    ### Adding a New Analyzer

    ```python
    @dataclass(frozen=True)
    class MyResult:
        '''Results package for MyAnalyzer.'''
        frame: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        def fit(self) -> "MyAnalyzer":
            resolved = self._resolve()
            self._frame = self._cfd.to_frame(resolved.conditions, resolved.samples)
            return self

        def result(self) -> MyResult:
            self._check_fitted()
            return MyResult(frame=self._frame)
    ```

    Plotting helpers accept the `*Result` dataclasses and return figures.
    """

    def __init__(self, cfd: ConditionalFreqDist, selection: Selection | None = None) -> None:
        self._cfd = cfd
        self.selection = selection or Selection()
        self._resolved: ResolvedSelection | None = None

    def _resolve(self) -> ResolvedSelection:
        self._resolved = self.selection.resolve(self._cfd)
        return self._resolved

    def _check_fitted(self) -> ResolvedSelection:
        if self._resolved is None:
            raise ValueError("Must call fit() before result()")
        return self._resolved

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Run the analysis.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return results as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
