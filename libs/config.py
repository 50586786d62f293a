"""
Configuration data model - class-based representation of kubeboot.yaml
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

NODE_ROLES = ("control-plane", "worker")


@dataclass
class SSHConfig:
    """SSH configuration"""
    connect_timeout: int
    batch_mode: bool
    default_exec_timeout: int = 300
    read_buffer_size: int = 4096
    poll_interval: float = 0.05
    default_username: str = "root"
    look_for_keys: bool = True
    allow_agent: bool = True
    verbose: bool = False


@dataclass
class LXCConfig:
    """LXC host configuration"""
    host: str


@dataclass
class NodeConfig:
    """Cluster node configuration (one LXC container)"""
    name: str
    id: int
    role: str
    hostname: Optional[str] = None


@dataclass
class TimeoutsConfig:
    """Timeouts in seconds"""
    kubeadm_init: int = 600
    command: int = 300


@dataclass
class ClusterConfig:  # pylint: disable=too-many-instance-attributes
    """Main cluster configuration class"""
    name: str
    lxc: LXCConfig
    ssh: SSHConfig
    nodes: List[NodeConfig]
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)
    id_base: int = 0
    environment: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], verbose: bool = False, environment: Optional[str] = None) -> "ClusterConfig":
        """Create ClusterConfig from dictionary (loaded from YAML)"""
        env_data = None
        if "environments" in data and environment:
            if environment not in data["environments"]:
                raise ValueError(f"Environment '{environment}' not found in configuration. Available: {list(data['environments'].keys())}")
            env_data = data["environments"][environment] or {}

        if env_data and "id-base" in env_data:
            id_base = env_data["id-base"]
        else:
            id_base = data.get("id-base", 0)

        # Environment-specific LXC host wins over the top-level one
        if env_data and "lxc" in env_data:
            lxc_data = env_data["lxc"]
        elif "lxc" in data:
            lxc_data = data["lxc"]
        else:
            raise ValueError("LXC configuration not found in environment or top-level config")
        lxc = LXCConfig(host=lxc_data["host"])

        ssh_data = data.get("ssh", {})
        ssh = SSHConfig(
            connect_timeout=ssh_data.get("connect_timeout", 10),
            batch_mode=ssh_data.get("batch_mode", True),
            default_username=ssh_data.get("default_username", "root"),
            verbose=verbose,
        )

        cluster_data = data.get("cluster") or {}
        nodes = [
            NodeConfig(
                name=node["name"],
                id=node["id"] + id_base,
                role=node.get("role", "worker"),
                hostname=node.get("hostname"),
            )
            for node in cluster_data.get("nodes", [])
        ]

        timeouts_data = data.get("timeouts", {})
        timeouts = TimeoutsConfig(
            kubeadm_init=timeouts_data.get("kubeadm_init", TimeoutsConfig.kubeadm_init),
            command=timeouts_data.get("command", TimeoutsConfig.command),
        )

        cfg = cls(
            name=cluster_data.get("name", "kind"),
            lxc=lxc,
            ssh=ssh,
            nodes=nodes,
            timeouts=timeouts,
            id_base=id_base,
            environment=environment,
        )
        cfg.validate()
        return cfg

    def validate(self):
        """Reject configurations no bootstrap could run against"""
        if not self.nodes:
            raise ValueError("No cluster nodes configured")
        seen_names = set()
        seen_ids = set()
        for node in self.nodes:
            if node.role not in NODE_ROLES:
                raise ValueError(f"Node '{node.name}' has unknown role '{node.role}'. Expected one of: {list(NODE_ROLES)}")
            if node.name in seen_names:
                raise ValueError(f"Duplicate node name '{node.name}'")
            if node.id in seen_ids:
                raise ValueError(f"Duplicate node id {node.id}")
            seen_names.add(node.name)
            seen_ids.add(node.id)

    @property
    def lxc_host(self) -> str:
        """Return LXC host."""
        return self.lxc.host

    @property
    def control_plane(self) -> List[NodeConfig]:
        """Return control-plane node configs in file order"""
        return [node for node in self.nodes if node.role == "control-plane"]

    @property
    def workers(self) -> List[NodeConfig]:
        """Return worker node configs in file order"""
        return [node for node in self.nodes if node.role == "worker"]
