"""Copy mapped files to the remote host over SSH."""

import getpass
import os
import re
import socket
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import paramiko
import structlog

from ..exceptions import DestinationInvalid, TransferError
from ..schemas import Destination, MappedPath

logger = structlog.get_logger(__name__)

DESTINATION_PATTERN = re.compile(r"^(?:(?P<username>[^@]+)@)?(?P<host>[^@]+)$")

# Tried in this order after the SSH agent
PRIVATE_KEY_FILES = ("id_ed25519", "id_rsa", "id_ecdsa", "id_dsa")


def parse_destination(raw: str, port: int = 22) -> Destination:
    """Parse ``[user@]host``; the user defaults to the local login name."""
    match = DESTINATION_PATTERN.match(raw.strip())
    if match is None:
        raise DestinationInvalid(f"Failed to parse destination {raw!r}")
    username = match.group("username") or os.environ.get("USER") or getpass.getuser()
    return Destination(username=username, host=match.group("host"), port=port)


class SshTransfer:
    """An authenticated SFTP session to one destination."""

    def __init__(
        self,
        destination: Destination,
        password_prompt: Optional[Callable[[str], str]] = None,
        timeout: int = 20,
        key_dir: Optional[Union[str, Path]] = None,
    ):
        self.destination = destination
        self.password_prompt = password_prompt
        self.timeout = timeout
        self.key_dir = Path(key_dir) if key_dir else Path.home() / ".ssh"
        self._ssh: Optional[paramiko.SSHClient] = None
        self._sftp: Optional[paramiko.SFTPClient] = None

    def __enter__(self) -> "SshTransfer":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _key_files(self) -> List[Path]:
        keys = []
        for name in PRIVATE_KEY_FILES:
            private_key = self.key_dir / name
            public_key = self.key_dir / f"{name}.pub"
            if private_key.exists() and public_key.exists():
                keys.append(private_key)
        return keys

    def _try_connect(self, **auth) -> Optional[paramiko.SSHClient]:
        client = paramiko.SSHClient()
        client.load_system_host_keys()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        options = {
            "hostname": self.destination.host,
            "port": self.destination.port,
            "username": self.destination.username,
            "timeout": self.timeout,
            "allow_agent": False,
            "look_for_keys": False,
        }
        options.update(auth)
        try:
            client.connect(**options)
        except paramiko.AuthenticationException as e:
            client.close()
            logger.debug("Authentication attempt failed", method=list(auth), error=str(e))
            return None
        except (paramiko.SSHException, socket.error) as e:
            client.close()
            raise TransferError(f"Failed to connect to {self.destination}: {e}") from e
        return client

    def connect(self) -> None:
        """Authenticate with the agent, then key files, then a password."""
        if self._sftp is not None:
            return

        logger.info("Connecting", destination=str(self.destination))
        client = self._try_connect(allow_agent=True)
        for key_file in self._key_files():
            if client is not None:
                break
            client = self._try_connect(key_filename=str(key_file))

        if client is None and self.password_prompt is not None:
            password = self.password_prompt(f"{self.destination}'s password: ")
            client = self._try_connect(password=password)

        if client is None:
            raise TransferError(f"Authentication to {self.destination} failed")

        self._ssh = client
        self._sftp = client.open_sftp()

    def close(self) -> None:
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        if self._ssh is not None:
            self._ssh.close()
            self._ssh = None

    def send(self, repo_root: Union[str, Path], entry: MappedPath) -> None:
        """Copy one file's bytes and permission bits to its destination."""
        if self._sftp is None:
            raise RuntimeError("Transfer session not connected")

        local = Path(repo_root) / entry.source
        try:
            mode = local.stat().st_mode & 0o777
            self._sftp.put(str(local), entry.destination)
            self._sftp.chmod(entry.destination, mode)
        except (OSError, paramiko.SSHException) as e:
            raise TransferError(
                f"Failed to copy {entry.source} to {entry.destination}: {e}"
            ) from e
        logger.debug("Copied file", source=entry.source, destination=entry.destination)

    def push(
        self,
        repo_root: Union[str, Path],
        entries: Iterable[MappedPath],
        progress: Optional[Callable[[MappedPath], None]] = None,
    ) -> int:
        """Send ``entries`` in order; returns how many were copied."""
        sent = 0
        for entry in entries:
            self.send(repo_root, entry)
            sent += 1
            if progress is not None:
                progress(entry)
        return sent
