"""
Shared fixtures: scripted in-memory nodes and a recording status
"""
import pytest
from cli.base import CommandSpec, CommandWrapper
from libs.status import Status
from nodes import CommandFailed, Node
from orchestration import CONTROL_PLANE_ARTIFACTS


class FakeNode(Node):
    """Node keeping files in memory; every operation is appended to a shared journal"""

    def __init__(self, name, role, journal):
        super().__init__(name, role)
        self.journal = journal
        self.files = {}
        # command substring -> (output, exit_code)
        self.exec_results = {}
        self.unwritable = set()
        self.timeouts = []

    def exec(self, command, timeout=None):
        self.journal.append(("exec", self.name, command))
        self.timeouts.append(timeout)
        for needle, outcome in self.exec_results.items():
            if needle in command:
                return outcome
        if "kubeadm init" in command:
            # kubeadm writes the credentials the other control planes need
            for path in CONTROL_PLANE_ARTIFACTS:
                self.files[path] = f"{self.name}:{path}".encode()
            return "Your Kubernetes control-plane has initialized successfully!", 0
        return "", 0

    def read_file(self, path, timeout=None):
        self.journal.append(("read", self.name, path))
        if path not in self.files:
            result = CommandWrapper.parse_result(f"base64: {path}: No such file or directory", 1)
            raise CommandFailed(self.name, CommandSpec("base64", ["-w0", path]), result)
        return self.files[path]

    def write_file(self, path, data, mode="0644", timeout=None):
        self.journal.append(("write", self.name, path))
        if path in self.unwritable:
            result = CommandWrapper.parse_result(f"sh: 1: cannot create {path}: No space left on device", 2)
            raise CommandFailed(self.name, CommandSpec("sh", ["-c", "..."]), result)
        self.files[path] = data


class RecordingStatus(Status):
    """Status remembering every start and effective end"""

    def __init__(self):
        super().__init__()
        self.events = []

    def start(self, message):
        self.events.append(("start", message))
        super().start(message)

    def end(self, success):
        if self.active:
            self.events.append(("end", success))
        super().end(success)


@pytest.fixture
def journal():
    """Ordered record of node operations across all fake nodes"""
    return []


@pytest.fixture
def make_node(journal):
    """Factory for fake nodes sharing one journal"""
    def _make(name, role="control-plane"):
        return FakeNode(name, role, journal)
    return _make


@pytest.fixture
def status():
    """Fixture for a recording status"""
    return RecordingStatus()
