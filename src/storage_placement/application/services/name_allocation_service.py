"""Storage account name allocation."""

from storage_placement.domain.base.exceptions import InvalidAccountSpecError, NameExhaustedError
from storage_placement.domain.base.ports import LoggingPort, StorageProviderPort
from storage_placement.domain.placement.policy import DEFAULT_MAX_ATTEMPTS
from storage_placement.domain.placement.value_objects import (
    ACCOUNT_NAME_MAX_LENGTH,
    ACCOUNT_NAME_MIN_LENGTH,
)
from storage_placement.infrastructure.utilities.random_names import RandomNameGenerator


class NameAllocationService:
    """Finds an available account name of the form <random prefix><suffix>."""

    def __init__(
        self,
        provider: StorageProviderPort,
        name_generator: RandomNameGenerator,
        logger: LoggingPort,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._provider = provider
        self._name_generator = name_generator
        self._logger = logger
        self.max_attempts = max_attempts

    def validate_suffix(self, suffix: str) -> None:
        """
        Check that prefix plus suffix fits the provider's name length limits.

        Raises:
            InvalidAccountSpecError: If the resulting name would be too long or short
        """
        length = self._name_generator.length + len(suffix)
        if not ACCOUNT_NAME_MIN_LENGTH <= length <= ACCOUNT_NAME_MAX_LENGTH:
            raise InvalidAccountSpecError(
                f"Account name length {length} for suffix '{suffix}' is outside "
                f"{ACCOUNT_NAME_MIN_LENGTH}..{ACCOUNT_NAME_MAX_LENGTH}",
                {"suffix": suffix, "prefix_length": self._name_generator.length},
            )

    def allocate_name(self, suffix: str) -> str:
        """
        Allocate an available account name.

        Each attempt issues exactly one availability query. No account is
        created here.

        Args:
            suffix: Fixed tail of the account name

        Returns:
            A name the provider reported as available

        Raises:
            InvalidAccountSpecError: If the suffix cannot produce a valid name
            NameExhaustedError: If every attempt produced an unavailable name
        """
        self.validate_suffix(suffix)

        candidates: list[str] = []
        for attempt in range(1, self.max_attempts + 1):
            candidate = f"{self._name_generator.generate()}{suffix}"
            candidates.append(candidate)
            if self._provider.check_name_available(candidate):
                self._logger.debug("Allocated account name %s on attempt %d", candidate, attempt)
                return candidate
            self._logger.info(
                "Account name %s is not available (attempt %d/%d)",
                candidate,
                attempt,
                self.max_attempts,
            )

        self._logger.error(
            "Giving up on suffix %s after %d unavailable names", suffix, self.max_attempts
        )
        raise NameExhaustedError(suffix, self.max_attempts, candidates)
