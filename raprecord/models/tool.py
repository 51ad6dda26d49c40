"""
External tool invocation result
"""
from dataclasses import dataclass


@dataclass
class ToolResult:
    """Outcome of one yt-dlp run"""
    returncode: int                 # exit code (-1 when the process never ran)
    stdout: str = ""                # captured standard output
    stderr: str = ""                # captured standard error (diagnostics)
    timed_out: bool = False         # killed after exceeding its timeout

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out
