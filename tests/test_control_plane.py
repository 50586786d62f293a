"""
Unit tests for control-plane bootstrap using pytest
"""
import threading
import pytest
from nodes import CommandFailed, CopyFailed, NoControlPlaneNodeError
from orchestration import (
    CONTROL_PLANE_ARTIFACTS,
    BootstrapError,
    BootstrapErrorKind,
    BootstrapState,
    ControlPlaneBootstrap,
    bootstrap_control_plane,
    kubeadm_init_command,
    plan_bootstrap,
    remove_taint_command,
)

INIT_COMMAND = "kubeadm init --skip-phases=preflight --config=/kind/kubeadm.conf --skip-token-print --v=6"
TAINT_COMMAND = "kubectl --kubeconfig=/etc/kubernetes/admin.conf taint nodes --all node-role.kubernetes.io/master-"


def _execs(journal):
    return [(node, command) for op, node, command in journal if op == "exec"]


def _writes(journal):
    return [(node, path) for op, node, path in journal if op == "write"]


def test_artifact_order():
    """Test the artifact list and its order"""
    assert CONTROL_PLANE_ARTIFACTS == (
        "/etc/kubernetes/admin.conf",
        "/etc/kubernetes/pki/ca.crt",
        "/etc/kubernetes/pki/ca.key",
        "/etc/kubernetes/pki/front-proxy-ca.crt",
        "/etc/kubernetes/pki/front-proxy-ca.key",
        "/etc/kubernetes/pki/sa.pub",
        "/etc/kubernetes/pki/sa.key",
        "/etc/kubernetes/pki/etcd/ca.crt",
        "/etc/kubernetes/pki/etcd/ca.key",
    )


def test_commands():
    """Test the fixed kubeadm and kubectl command lines"""
    assert kubeadm_init_command().render() == INIT_COMMAND
    assert remove_taint_command().render() == TAINT_COMMAND


def test_two_control_planes_and_worker(make_node, journal, status):
    """Test A(cp), B(cp), C(worker): init on A, copies to B, taint kept"""
    a = make_node("a")
    b = make_node("b")
    c = make_node("c", "worker")
    bootstrap = bootstrap_control_plane([a, b, c], status=status)
    assert bootstrap.bootstrap_node is a
    assert bootstrap.secondaries == [b]
    assert bootstrap.state is BootstrapState.DONE
    assert _execs(journal) == [("a", INIT_COMMAND)]
    assert _writes(journal) == [("b", path) for path in CONTROL_PLANE_ARTIFACTS]
    assert bootstrap.copied == [("b", path) for path in CONTROL_PLANE_ARTIFACTS]
    for path in CONTROL_PLANE_ARTIFACTS:
        assert b.files[path] == a.files[path]
    assert not c.files
    assert status.events == [("start", "Starting control-plane"), ("end", True)]


def test_single_node_removes_taint(make_node, journal, status):
    """Test a single node cluster: init, no copies, taint removed"""
    a = make_node("a")
    bootstrap = bootstrap_control_plane([a], status=status)
    assert bootstrap.bootstrap_node is a
    assert bootstrap.secondaries == []
    assert _execs(journal) == [("a", INIT_COMMAND), ("a", TAINT_COMMAND)]
    assert _writes(journal) == []
    assert bootstrap.state is BootstrapState.DONE
    assert status.success is True


@pytest.mark.parametrize("worker_count", [1, 3])
def test_taint_kept_with_more_nodes(make_node, journal, worker_count):
    """Test taint removal never runs for clusters of two or more nodes"""
    nodes = [make_node("cp")] + [make_node(f"w{i}", "worker") for i in range(worker_count)]
    bootstrap_control_plane(nodes)
    assert all("taint" not in command for _, command in _execs(journal))


def test_copy_count_and_order(make_node, journal):
    """Test N secondaries get N times the artifact list, node by node"""
    nodes = [make_node(name) for name in ("cp3", "cp1", "cp4", "cp2")]
    bootstrap = bootstrap_control_plane(nodes)
    assert bootstrap.bootstrap_node.name == "cp1"
    writes = _writes(journal)
    assert len(writes) == 3 * len(CONTROL_PLANE_ARTIFACTS)
    expected = [(node, path) for node in ("cp2", "cp3", "cp4") for path in CONTROL_PLANE_ARTIFACTS]
    assert writes == expected
    # every read comes from the bootstrap node
    assert {node for op, node, _ in journal if op == "read"} == {"cp1"}


def test_no_control_plane_node(make_node, journal, status):
    """Test no control-plane node aborts before any command"""
    nodes = [make_node("w1", "worker"), make_node("w2", "worker")]
    bootstrap = ControlPlaneBootstrap(nodes, status=status)
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap.run()
    assert exc_info.value.kind is BootstrapErrorKind.NO_CONTROL_PLANE_NODE
    assert isinstance(exc_info.value.cause, NoControlPlaneNodeError)
    assert journal == []
    assert bootstrap.state is BootstrapState.ABORTED
    assert bootstrap.bootstrap_node is None
    assert status.events == [("start", "Starting control-plane"), ("end", False)]


def test_init_failure_stops_before_propagation(make_node, journal, status):
    """Test a failed kubeadm init aborts with no copy attempted"""
    a = make_node("a")
    b = make_node("b")
    a.exec_results["kubeadm init"] = ("[init] Using Kubernetes version\nerror execution phase wait-control-plane", 1)
    bootstrap = ControlPlaneBootstrap([a, b], status=status)
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap.run()
    err = exc_info.value
    assert err.kind is BootstrapErrorKind.INIT_FAILED
    assert err.node == "a"
    assert isinstance(err.cause, CommandFailed)
    assert isinstance(err.__cause__, CommandFailed)
    assert err.cause.lines[-1] == "error execution phase wait-control-plane"
    assert str(err).startswith("failed to init node with kubeadm: ")
    assert _execs(journal) == [("a", INIT_COMMAND)]
    assert not [entry for entry in journal if entry[0] in ("read", "write")]
    assert bootstrap.state is BootstrapState.ABORTED
    assert status.success is False


def test_copy_failure_stops_propagation(make_node, journal):
    """Test the first failed copy aborts and nothing after it is attempted"""
    a, b, c = make_node("a"), make_node("b"), make_node("c")
    failing_path = "/etc/kubernetes/pki/sa.pub"
    c.unwritable.add(failing_path)
    bootstrap = ControlPlaneBootstrap([a, b, c])
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap.run()
    err = exc_info.value
    assert err.kind is BootstrapErrorKind.PROPAGATION_FAILED
    assert err.node == "c"
    assert err.path == failing_path
    assert isinstance(err.cause, CopyFailed)
    assert "failed to copy /etc/kubernetes/pki/sa.pub to node c" in str(err)
    failing_index = CONTROL_PLANE_ARTIFACTS.index(failing_path)
    expected_writes = [("b", path) for path in CONTROL_PLANE_ARTIFACTS]
    expected_writes += [("c", path) for path in CONTROL_PLANE_ARTIFACTS[: failing_index + 1]]
    assert _writes(journal) == expected_writes
    assert journal[-1] == ("write", "c", failing_path)
    assert len(bootstrap.copied) == len(CONTROL_PLANE_ARTIFACTS) + failing_index
    assert bootstrap.state is BootstrapState.ABORTED


def test_missing_artifact_on_bootstrap_node(make_node, journal):
    """Test a file kubeadm did not produce fails propagation on read"""
    a, b = make_node("a"), make_node("b")
    a.exec_results["kubeadm init"] = ("done", 0)
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap_control_plane([a, b])
    err = exc_info.value
    assert err.kind is BootstrapErrorKind.PROPAGATION_FAILED
    assert err.path == "/etc/kubernetes/admin.conf"
    assert err.cause.stage == "read"
    assert _writes(journal) == []


def test_taint_removal_failure(make_node, status):
    """Test a failed taint removal aborts the run"""
    a = make_node("a")
    a.exec_results["taint"] = ("error: taint \"node-role.kubernetes.io/master\" not found", 1)
    bootstrap = ControlPlaneBootstrap([a], status=status)
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap.run()
    assert exc_info.value.kind is BootstrapErrorKind.TAINT_REMOVAL_FAILED
    assert exc_info.value.node == "a"
    assert bootstrap.state is BootstrapState.ABORTED
    assert status.events[-1] == ("end", False)


def test_cancelled_before_init(make_node, journal):
    """Test a set cancel event aborts before any command"""
    cancel = threading.Event()
    cancel.set()
    bootstrap = ControlPlaneBootstrap([make_node("a")], cancel_event=cancel)
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap.run()
    assert exc_info.value.kind is BootstrapErrorKind.CANCELLED
    assert journal == []
    assert bootstrap.state is BootstrapState.ABORTED


def test_cancelled_during_propagation(make_node, journal):
    """Test cancellation between copies stops propagation"""
    cancel = threading.Event()
    a, b = make_node("a"), make_node("b")
    original_write = b.write_file

    def write_then_cancel(path, data, mode="0644", timeout=None):
        original_write(path, data, mode=mode, timeout=timeout)
        cancel.set()

    b.write_file = write_then_cancel
    with pytest.raises(BootstrapError) as exc_info:
        bootstrap_control_plane([a, b], cancel_event=cancel)
    assert exc_info.value.kind is BootstrapErrorKind.CANCELLED
    assert _writes(journal) == [("b", CONTROL_PLANE_ARTIFACTS[0])]


def test_timeouts_passed_to_commands(make_node):
    """Test init and other commands get their own timeouts"""
    a = make_node("a")
    bootstrap_control_plane([a], init_timeout=900, command_timeout=60)
    assert a.timeouts == [900, 60]


def test_run_only_once(make_node):
    """Test a bootstrap object cannot be rerun"""
    bootstrap = ControlPlaneBootstrap([make_node("a")])
    bootstrap.run()
    with pytest.raises(RuntimeError):
        bootstrap.run()


def test_input_nodes_not_mutated(make_node):
    """Test the caller's node list is left untouched"""
    nodes = [make_node("b"), make_node("w", "worker"), make_node("a")]
    snapshot = list(nodes)
    bootstrap_control_plane(nodes)
    assert nodes == snapshot


def test_plan_bootstrap(make_node, journal):
    """Test the plan matches what a run does, without touching nodes"""
    a, b, w = make_node("a"), make_node("b"), make_node("w", "worker")
    plan = plan_bootstrap([w, b, a])
    assert plan.bootstrap_node is a
    assert plan.secondaries == (b,)
    assert plan.copies == [(b, path) for path in CONTROL_PLANE_ARTIFACTS]
    assert plan.remove_taint is False
    assert plan_bootstrap([a]).remove_taint is True
    assert journal == []
