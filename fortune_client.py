import subprocess

DISABLED_TEXT = "fortune is disabled."


class FortuneError(RuntimeError):
    """Raised when the fortune command cannot produce a quote."""


class FortuneClient:
    """Fetch a random quote from the local `fortune` program."""

    def __init__(self, enabled: bool, command: str, timeout: float, logger):
        """Initialize client with the feature switch and command settings."""
        self.enabled = enabled
        self.logger = logger
        self.command = command
        self.timeout = timeout

    def get_fortune(self) -> str:
        """Return a quote, or a notice when the feature is switched off."""
        if not self.enabled:
            return DISABLED_TEXT
        try:
            result = subprocess.run(
                [self.command],
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            self.logger.error("fortune error: %s", exc.stderr)
            raise FortuneError(f"{self.command} exited with status {exc.returncode}") from exc
        except subprocess.TimeoutExpired as exc:
            self.logger.error("fortune timeout: %s", exc)
            raise FortuneError(f"{self.command} timed out") from exc
        except OSError as exc:
            self.logger.error("fortune launch error: %s", exc)
            raise FortuneError(str(exc)) from exc
        output = result.stdout
        if output.endswith("\n"):
            output = output[:-1]
        return output
