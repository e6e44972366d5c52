"""
Local sapporo-service WES, run with the docker CLI.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
import time
from pathlib import Path
from urllib.parse import urlparse

from gh_trs.exceptions import WesError

logger = logging.getLogger(__name__)

SAPPORO_SERVICE_IMAGE = "ghcr.io/sapporo-wes/sapporo-service:1.1.1"
SAPPORO_SERVICE_NAME = "gh-trs-sapporo-service"
SAPPORO_PORT = 1122
DOCKER_NETWORK = "gh-trs-network"


def inside_docker_container() -> bool:
    return Path("/.dockerenv").exists()


def default_wes_location() -> str:
    """Where a sapporo-service started by gh-trs can be reached."""
    if inside_docker_container():
        return f"http://{SAPPORO_SERVICE_NAME}:{SAPPORO_PORT}"
    return f"http://localhost:{SAPPORO_PORT}"


class SapporoService:
    """
    Start, stop and check the ``gh-trs-sapporo-service`` container.

    Args:
        docker_host: Docker daemon socket, e.g. ``unix:///var/run/docker.sock``
        run_dir: Sapporo run directory, mounted at the same path in the container
        settle_seconds: Pause after start/stop to let the container settle
    """

    def __init__(self, docker_host: str, run_dir: Path, settle_seconds: float = 3.0):
        self.docker_host = docker_host
        self.run_dir = Path(run_dir).absolute()
        self.settle_seconds = settle_seconds

    def _docker(self, *args: str) -> subprocess.CompletedProcess:
        cmd = ["docker", "-H", self.docker_host, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise WesError(
                "Please make sure that the docker command is present in your PATH"
            ) from e

    def run_args(self) -> list[str]:
        """Arguments of ``docker run`` that start the service."""
        args = ["run", "-d", "--rm"]
        socket_path = urlparse(self.docker_host).path
        if self.docker_host.startswith("unix://") and socket_path:
            args += ["-v", f"{socket_path}:/var/run/docker.sock"]
        args += [
            "-v", f"{tempfile.gettempdir()}:/tmp",
            "-v", f"{self.run_dir}:{self.run_dir}",
        ]
        if inside_docker_container():
            args += ["--network", DOCKER_NETWORK]
        else:
            args += ["-p", f"{SAPPORO_PORT}:{SAPPORO_PORT}"]
        args += [
            "--name", SAPPORO_SERVICE_NAME,
            SAPPORO_SERVICE_IMAGE,
            "sapporo", "--run-dir", str(self.run_dir),
        ]
        return args

    def is_running(self) -> bool:
        """
        Check for the container with ``docker ps``.

        Raises:
            WesError: If docker cannot be queried
        """
        result = self._docker("ps", "-f", f"name={SAPPORO_SERVICE_NAME}")
        if result.returncode != 0:
            raise WesError(
                f"Failed to check gh-trs's sapporo-service status: {result.stderr.strip()}"
            )
        return SAPPORO_SERVICE_NAME in result.stdout

    def start(self) -> bool:
        """
        Start the container unless it is already running.

        Returns:
            True if this call started it
        """
        if self.is_running():
            logger.info("The sapporo-service is already running. So skip starting it.")
            return False

        logger.info(
            f"Starting the sapporo-service for gh-trs using docker_host: {self.docker_host}"
        )
        self.run_dir.mkdir(parents=True, exist_ok=True)
        result = self._docker(*self.run_args())
        if result.returncode != 0:
            raise WesError(f"Failed to start the sapporo-service: {result.stderr.strip()}")
        logger.debug(f"Stdout from docker:\n{result.stdout.strip()}")
        time.sleep(self.settle_seconds)
        return True

    def stop(self) -> None:
        if not self.is_running():
            logger.info("The sapporo-service for gh-trs is not running. So skip stopping it.")
            return

        logger.info("Stopping the sapporo-service for gh-trs")
        result = self._docker("kill", SAPPORO_SERVICE_NAME)
        if result.returncode != 0:
            raise WesError(f"Failed to stop the sapporo-service: {result.stderr.strip()}")
        logger.debug(f"Stdout from docker:\n{result.stdout.strip()}")
        time.sleep(self.settle_seconds)
