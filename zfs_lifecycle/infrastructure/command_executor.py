"""
Concrete implementation of command executor interface.
"""
import logging
import subprocess
from typing import List, Optional, Sequence

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult

TIMEOUT_RETURNCODE = 124


class CommandExecutor(ICommandExecutor):
    """Runs zfs through a fixed argv, optionally elevated with a non-interactive prefix."""

    def __init__(self,
                 zfs_binary: str = "zfs",
                 privilege_prefix: Optional[Sequence[str]] = ("sudo", "-n"),
                 timeout: Optional[float] = None):
        self.zfs_binary = zfs_binary
        self.privilege_prefix: List[str] = list(privilege_prefix or [])
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

        # Read-only queries first, then the privileged lifecycle actions
        self._allowed_zfs_commands = {
            'get', 'list', 'load-key', 'unload-key', 'mount', 'unmount'
        }

    def execute_zfs(self, command: str, *args: str,
                    stdin_payload: Optional[str] = None,
                    privileged: bool = False) -> CommandResult:
        """Execute ZFS command with validation."""
        if command not in self._allowed_zfs_commands:
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=f"ZFS command '{command}' not allowed"
            )

        full_command = [self.zfs_binary, command] + list(args)
        if privileged:
            full_command = self.privilege_prefix + full_command
        return self.run(full_command, stdin_payload=stdin_payload)

    def run(self, argv: Sequence[str], stdin_payload: Optional[str] = None) -> CommandResult:
        """Spawn argv, feed the optional payload as one line, and collect all output.

        communicate() writes the payload, closes stdin and only then drains
        stdout/stderr, so a child blocked on input can never deadlock us.
        """
        command = list(argv)
        self.logger.debug(f"Executing command: {' '.join(command)}")

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                close_fds=True
            )
        except OSError as e:
            self.logger.error(f"Failed to start {command[0]}: {e}")
            return CommandResult(
                returncode=-1,
                stdout="",
                stderr=str(e),
                spawn_error=str(e)
            )

        payload = None
        if stdin_payload is not None:
            payload = f"{stdin_payload}\n".encode('utf-8')

        try:
            stdout, stderr = process.communicate(input=payload, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            self.logger.warning(f"Command timed out after {self.timeout} seconds: {command[0]}")
            return CommandResult(
                success=False,
                returncode=TIMEOUT_RETURNCODE,
                stdout="",
                stderr=f"Command timed out after {self.timeout} seconds"
            )
        except OSError as e:
            process.kill()
            process.wait()
            self.logger.error(f"I/O failure while talking to {command[0]}: {e}")
            return CommandResult(
                success=False,
                returncode=process.returncode if process.returncode is not None else -1,
                stdout="",
                stderr=f"I/O failure: {e}"
            )

        stdout_str = stdout.decode('utf-8', errors='replace')
        stderr_str = stderr.decode('utf-8', errors='replace').strip()

        if process.returncode != 0:
            self.logger.warning(
                f"Command failed with exit code {process.returncode}: {stderr_str}"
            )

        return CommandResult(
            returncode=process.returncode,
            stdout=stdout_str,
            stderr=stderr_str
        )
