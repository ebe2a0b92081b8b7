"""Session flow: Landing -> Wizard -> Processing -> Dashboard.

GrantPilotSession owns everything a single user session holds in memory: the
wizard, the ranked results and the one expanded result. Nothing is persisted.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from .catalog import GRANT_CATALOG, load_catalog
from .config import MISSING_API_KEY_MESSAGE, Config
from .matcher import GeminiMatchingClient, match_grants
from .models import AggregatedResult, BusinessProfile, Grant
from .wizard import ProfileWizard

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "An error occurred during AI analysis. Please try again."


class AppState(Enum):
    LANDING = "landing"
    WIZARD = "wizard"
    PROCESSING = "processing"
    DASHBOARD = "dashboard"


class GrantPilotSession:
    """In-memory state machine for one user session."""

    def __init__(
        self,
        config: Config,
        catalog: Optional[Sequence[Grant]] = None,
        matcher_factory: Optional[Callable[[Config], GeminiMatchingClient]] = None,
    ) -> None:
        self.config = config
        if catalog is not None:
            self.catalog = tuple(catalog)
        elif config.catalog_path:
            self.catalog = load_catalog(config.catalog_path)
        else:
            self.catalog = GRANT_CATALOG
        self.matcher_factory = matcher_factory or GeminiMatchingClient.from_config

        self.state = AppState.LANDING
        self.wizard: Optional[ProfileWizard] = None
        self.results: list[AggregatedResult] = []
        self.selected: Optional[AggregatedResult] = None
        self.business_name = ""
        self.notice: Optional[str] = None
        self._run_id = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Enter the wizard. Blocked (stays on Landing) when the API key is missing."""
        if not self.config.has_api_key:
            logger.warning("Start blocked: matching service API key is not configured")
            self.notice = MISSING_API_KEY_MESSAGE
            return False
        self.notice = None
        self._enter_wizard()
        return True

    async def complete_wizard(self, profile: BusinessProfile) -> bool:
        """Run the match for a completed profile and show the dashboard.

        Returns False when the batch failed (session is back on Landing) or
        when the run was abandoned by start_over/go_home.
        """
        self._run_id += 1
        run_id = self._run_id
        self.business_name = profile.company_name
        self.state = AppState.PROCESSING
        self.notice = None

        try:
            async with self.matcher_factory(self.config) as matcher:
                results = await match_grants(
                    profile,
                    self.catalog,
                    matcher,
                    max_concurrency=self.config.max_concurrency,
                )
        except Exception as exc:
            if run_id != self._run_id:
                return False
            logger.error("Match run failed for %s: %s", profile.company_name, exc, exc_info=True)
            self._discard()
            self.notice = ANALYSIS_FAILED_MESSAGE
            self.state = AppState.LANDING
            return False

        if run_id != self._run_id:
            logger.info("Discarding %d results from abandoned run", len(results))
            return False

        self.results = results
        self.selected = None
        self.state = AppState.DASHBOARD
        return True

    def start_over(self) -> None:
        """Abandon the current results (or in-flight run) and restart the wizard."""
        self._run_id += 1
        self._discard()
        self._enter_wizard()

    def go_home(self) -> None:
        self._run_id += 1
        self._discard()
        self.state = AppState.LANDING

    # ------------------------------------------------------------------
    # Dashboard selection
    # ------------------------------------------------------------------

    def select(self, index: int) -> AggregatedResult:
        """Expand result number index (0-based) into the detail view."""
        if self.state is not AppState.DASHBOARD:
            raise RuntimeError("No results to select outside the dashboard")
        self.selected = self.results[index]
        return self.selected

    def close_detail(self) -> None:
        self.selected = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter_wizard(self) -> None:
        self.wizard = ProfileWizard()
        self.state = AppState.WIZARD

    def _discard(self) -> None:
        self.wizard = None
        self.results = []
        self.selected = None
        self.business_name = ""
