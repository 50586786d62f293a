#!/usr/bin/env python3
"""
kubeboot CLI - bootstrap a Kubernetes control plane on LXC container nodes
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional
import yaml
from dependency_injector import containers, providers
from commands.init import Init
from commands.status import ClusterStatus
from libs.config import ClusterConfig
from libs.logger import get_logger, init_logger
from services.lxc import LXCService
from services.pct import PCTService

DEFAULT_CONFIG_FILE = Path.cwd() / "kubeboot.yaml"
logger = get_logger(__name__)


def load_config(config_file: Path) -> dict:
    """Load configuration from YAML file as dictionary"""
    if not config_file.exists():
        logger.error("Configuration file %s not found", config_file)
        sys.exit(1)
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as err:
        logger.error("Error loading configuration: %s", err)
        sys.exit(1)


def get_config(config_file: Path, environment: Optional[str] = None, verbose: bool = False) -> ClusterConfig:
    """Get configuration and return as ClusterConfig instance"""
    try:
        return ClusterConfig.from_dict(load_config(config_file), verbose=verbose, environment=environment)
    except (KeyError, ValueError) as err:
        logger.error("Invalid configuration in %s: %s", config_file, err)
        sys.exit(1)


def build_container(config_file: Path, environment: Optional[str], verbose: bool) -> containers.DynamicContainer:
    """Wire configuration, services and commands"""
    di = containers.DynamicContainer()
    # Lazy-load config: only read when a command is resolved
    di.config = providers.Singleton(get_config, config_file=config_file, environment=environment, verbose=verbose)
    # One SSH session to the LXC host shared by every service of a run
    di.lxc_service = providers.Singleton(LXCService.from_config, cfg=di.config)
    di.pct_service = providers.Factory(PCTService, lxc_service=di.lxc_service)
    di.init = providers.Factory(
        Init,
        cfg=di.config,
        lxc_service=di.lxc_service,
        pct_service=di.pct_service,
    )
    di.status = providers.Factory(
        ClusterStatus,
        cfg=di.config,
        lxc_service=di.lxc_service,
        pct_service=di.pct_service,
    )
    return di


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="kubeboot - bootstrap a Kubernetes control plane on LXC container nodes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log command output to the console")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file (default: kubeboot.yaml)")
    parser.add_argument("--environment", "-e", type=str, default=None, help="Environment section of the configuration to use")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Run kubeadm init and copy control-plane certificates")
    init_parser.add_argument("--planonly", action="store_true", help="Show bootstrap plan and exit without executing")

    subparsers.add_parser("status", help="Show configured nodes and container state")

    args = parser.parse_args(argv)
    init_logger(level=logging.DEBUG if args.verbose else logging.INFO)
    config_file = Path(args.config).resolve() if args.config else DEFAULT_CONFIG_FILE
    di = build_container(config_file, args.environment, args.verbose)

    if args.command == "init":
        di.init().run(args)
    elif args.command == "status":
        di.status().run(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
