"""
SSH Service - manages the SSH connection to the LXC host and command execution
"""
import logging
import sys
import time
from pathlib import Path
from typing import Optional
import paramiko
from libs.config import SSHConfig
logger = logging.getLogger(__name__)

PRIVATE_KEY_FILES = ("id_rsa", "id_ed25519")


class SSHService:
    """Service that manages SSH connections and command execution"""
    def __init__(self, host: str, ssh_config: SSHConfig):
        """
        Initialize SSH service
        Args:
            host: SSH host (format: user@host or just host)
            ssh_config: SSH configuration
        """
        self.host = host
        self.ssh_config = ssh_config
        self._client: Optional[paramiko.SSHClient] = None
        if "@" in host:
            self.username, self.hostname = host.split("@", 1)
        else:
            self.username = ssh_config.default_username
            self.hostname = host

    def _load_private_key(self) -> Optional[paramiko.PKey]:
        """Load the first usable private key from ~/.ssh"""
        for key_name in PRIVATE_KEY_FILES:
            key_path = Path.home() / ".ssh" / key_name
            if not key_path.exists():
                continue
            for key_class in (paramiko.RSAKey, paramiko.Ed25519Key):
                try:
                    pkey = key_class.from_private_key_file(str(key_path))
                except (paramiko.SSHException, OSError):
                    continue
                logger.debug("Loaded private key from %s", key_path)
                return pkey
        return None

    def connect(self) -> bool:
        """
        Establish SSH connection
        Returns:
            True if connection successful, False otherwise
        """
        if self.is_connected():
            return True
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        connect_kwargs = {
            "hostname": self.hostname,
            "username": self.username,
            "timeout": self.ssh_config.connect_timeout,
            "look_for_keys": self.ssh_config.look_for_keys,
            "allow_agent": self.ssh_config.allow_agent,
        }
        pkey = self._load_private_key()
        if pkey:
            connect_kwargs["pkey"] = pkey
        try:
            client.connect(**connect_kwargs)
        except paramiko.AuthenticationException as exc:
            logger.error("SSH authentication failed to %s: %s", self.host, exc)
            return False
        except (paramiko.SSHException, OSError) as exc:
            logger.error("SSH connection error to %s: %s", self.host, exc)
            return False
        self._client = client
        logger.info("SSH connection established to %s@%s", self.username, self.hostname)
        return True

    def disconnect(self):
        """Close SSH connection"""
        if not self._client:
            return
        try:
            self._client.close()
        finally:
            self._client = None
        logger.debug("SSH connection closed to %s", self.host)

    def is_connected(self) -> bool:
        """Check if SSH connection is active"""
        if not self._client:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active()

    def _echo(self, data: str, stream):
        if self.ssh_config.verbose:
            stream.write(data)
            stream.flush()

    def execute(self, command: str, timeout: Optional[int] = None) -> tuple[Optional[str], Optional[int]]:
        """
        Execute command via SSH connection and capture combined output
        Args:
            command: Command to execute
            timeout: Seconds without output after which the command is abandoned
        Returns:
            Tuple of (output, exit_code); (None, None) when the command could not
            be run or timed out
        """
        if not self.connect():
            logger.error("Cannot execute command: SSH connection not available")
            return None, None
        logger.debug("Running: %s", command)
        exec_timeout = timeout or self.ssh_config.default_exec_timeout
        buffer_size = self.ssh_config.read_buffer_size
        try:
            _, stdout, stderr = self._client.exec_command(command, timeout=exec_timeout)
            channel = stdout.channel
            channel.setblocking(0)
            out_chunks = []
            err_chunks = []
            last_output_time = time.time()
            while not channel.exit_status_ready():
                received = False
                if channel.recv_ready():
                    data = channel.recv(buffer_size).decode("utf-8", errors="replace")
                    if data:
                        received = True
                        out_chunks.append(data)
                        self._echo(data, sys.stdout)
                if channel.recv_stderr_ready():
                    data = channel.recv_stderr(buffer_size).decode("utf-8", errors="replace")
                    if data:
                        received = True
                        err_chunks.append(data)
                        self._echo(data, sys.stderr)
                if received:
                    last_output_time = time.time()
                elif time.time() - last_output_time > exec_timeout:
                    logger.error("SSH command timeout after %ss of no output", exec_timeout)
                    channel.close()
                    return None, None
                time.sleep(self.ssh_config.poll_interval)
            # Drain whatever arrived after the exit status, up to EOF
            channel.setblocking(1)
            remaining = stdout.read().decode("utf-8", errors="replace")
            if remaining:
                out_chunks.append(remaining)
                self._echo(remaining, sys.stdout)
            remaining_err = stderr.read().decode("utf-8", errors="replace")
            if remaining_err:
                err_chunks.append(remaining_err)
                self._echo(remaining_err, sys.stderr)
            exit_code = channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as exc:
            logger.error("SSH command execution failed: %s", exc)
            return None, None
        output = "".join(out_chunks).strip()
        error_output = "".join(err_chunks).strip()
        combined = "\n".join(part for part in (output, error_output) if part)
        return combined, exit_code

    def __enter__(self):
        """Context manager entry"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()
