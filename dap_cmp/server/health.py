from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Sequence


class Status(Enum):
    ok = auto()
    info = auto()
    warn = auto()
    error = auto()


@dataclass(frozen=True)
class Check:
    status: Status
    message: str
    advice: Sequence[str] = ()


@dataclass(frozen=True)
class Probe:
    cmp: bool
    dap: bool
    session: bool
    completions: bool
    dap_buffer: bool


def checks(probe: Probe) -> Iterator[Check]:
    if probe.cmp:
        yield Check(status=Status.ok, message="nvim-cmp is available")
    else:
        yield Check(
            status=Status.error,
            message="nvim-cmp is not available",
            advice=("Install nvim-cmp: https://github.com/hrsh7th/nvim-cmp",),
        )

    if not probe.dap:
        yield Check(
            status=Status.error,
            message="nvim-dap is not available",
            advice=("Install nvim-dap: https://github.com/mfussenegger/nvim-dap",),
        )
    elif not probe.session:
        yield Check(status=Status.ok, message="nvim-dap is available")
        yield Check(
            status=Status.warn,
            message="No active DAP session",
            advice=("Start a debug session to test completion",),
        )
    else:
        yield Check(status=Status.ok, message="nvim-dap is available")
        yield Check(status=Status.ok, message="DAP session is active")
        if probe.completions:
            yield Check(
                status=Status.ok, message="DAP adapter supports completion requests"
            )
        else:
            yield Check(
                status=Status.warn,
                message="DAP adapter does not support completion requests",
                advice=(
                    "Completion will use fallback mode",
                    "Check your DAP adapter configuration",
                ),
            )

    if probe.dap_buffer:
        yield Check(status=Status.ok, message="Current buffer is a DAP buffer")
    else:
        yield Check(
            status=Status.info,
            message="Current buffer is not a DAP buffer",
            advice=("This is normal if you are not currently debugging",),
        )


def report(checks: Iterable[Check]) -> str:
    def cont() -> Iterator[str]:
        yield "# dap_cmp"
        for check in checks:
            yield f"- {check.status.name.upper()} {check.message}"
            for line in check.advice:
                yield f"  - {line}"

    return "\n".join(cont())
