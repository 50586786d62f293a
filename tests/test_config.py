"""
Unit tests for ClusterConfig using pytest
"""
import pytest
from libs.config import ClusterConfig


@pytest.fixture
def config_data():
    """Fixture for a configuration dictionary as loaded from YAML"""
    return {
        "id-base": 3000,
        "lxc": {"host": "root@10.11.3.4"},
        "ssh": {"connect_timeout": 5, "default_username": "admin"},
        "cluster": {
            "name": "kind",
            "nodes": [
                {"name": "kind-control-plane", "id": 100, "role": "control-plane"},
                {"name": "kind-control-plane2", "id": 101, "role": "control-plane"},
                {"name": "kind-worker", "id": 110},
            ],
        },
        "timeouts": {"kubeadm_init": 900},
        "environments": {
            "dev": {"id-base": 4000, "lxc": {"host": "root@10.11.2.4"}},
            "prod": None,
        },
    }


def test_from_dict(config_data):
    """Test values are read and ids offset by id-base"""
    cfg = ClusterConfig.from_dict(config_data)
    assert cfg.name == "kind"
    assert cfg.lxc_host == "root@10.11.3.4"
    assert cfg.ssh.connect_timeout == 5
    assert cfg.ssh.default_username == "admin"
    assert [node.id for node in cfg.nodes] == [3100, 3101, 3110]
    assert [node.name for node in cfg.control_plane] == ["kind-control-plane", "kind-control-plane2"]
    assert [node.name for node in cfg.workers] == ["kind-worker"]
    assert cfg.timeouts.kubeadm_init == 900
    assert cfg.timeouts.command == 300
    assert cfg.environment is None


def test_environment_overrides(config_data):
    """Test environment id-base and LXC host win over top-level values"""
    cfg = ClusterConfig.from_dict(config_data, environment="dev")
    assert cfg.environment == "dev"
    assert cfg.lxc_host == "root@10.11.2.4"
    assert cfg.id_base == 4000
    assert cfg.nodes[0].id == 4100


def test_empty_environment_uses_top_level(config_data):
    """Test an empty environment section keeps top-level values"""
    cfg = ClusterConfig.from_dict(config_data, environment="prod")
    assert cfg.lxc_host == "root@10.11.3.4"
    assert cfg.id_base == 3000


def test_unknown_environment(config_data):
    """Test an unknown environment is rejected"""
    with pytest.raises(ValueError, match="Environment 'qa' not found"):
        ClusterConfig.from_dict(config_data, environment="qa")


def test_verbose_flag(config_data):
    """Test verbose is carried into SSH config"""
    assert ClusterConfig.from_dict(config_data, verbose=True).ssh.verbose is True


def test_missing_lxc(config_data):
    """Test configuration without LXC host is rejected"""
    del config_data["lxc"]
    with pytest.raises(ValueError):
        ClusterConfig.from_dict(config_data)


def test_no_nodes(config_data):
    """Test configuration without nodes is rejected"""
    config_data["cluster"]["nodes"] = []
    with pytest.raises(ValueError, match="No cluster nodes"):
        ClusterConfig.from_dict(config_data)


def test_unknown_role(config_data):
    """Test unknown node roles are rejected"""
    config_data["cluster"]["nodes"][2]["role"] = "etcd"
    with pytest.raises(ValueError, match="unknown role"):
        ClusterConfig.from_dict(config_data)


@pytest.mark.parametrize("field,value", [("name", "kind-control-plane"), ("id", 100)])
def test_duplicates(config_data, field, value):
    """Test duplicate node names and ids are rejected"""
    config_data["cluster"]["nodes"][1][field] = value
    with pytest.raises(ValueError, match="Duplicate"):
        ClusterConfig.from_dict(config_data)


def test_missing_node_name(config_data):
    """Test a node without a name fails with KeyError"""
    del config_data["cluster"]["nodes"][0]["name"]
    with pytest.raises(KeyError):
        ClusterConfig.from_dict(config_data)
