"""Exit status of a test process."""

import sys
from dataclasses import dataclass
from typing import ClassVar, NoReturn


@dataclass(frozen=True)
class ExitStatus:
    """Exit code used as the result of the test process.

    ``exit()`` is the only place the library terminates the process; nothing
    calls it implicitly.
    """

    code: int

    OK: ClassVar["ExitStatus"]
    FAILED: ClassVar["ExitStatus"]

    @property
    def success(self) -> bool:
        """Whether the status is successful."""
        return self.code == 0

    def exit(self) -> NoReturn:
        """Terminate the test process with the exit code.

        Should only be called once the host program has finished its cleanup.
        """
        sys.exit(self.code)

    def exit_if_failed(self) -> None:
        """Terminate the test process if the status is not successful."""
        if not self.success:
            self.exit()


ExitStatus.OK = ExitStatus(0)
ExitStatus.FAILED = ExitStatus(101)
