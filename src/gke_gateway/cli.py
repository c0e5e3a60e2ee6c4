#!/usr/bin/env python3
"""
Command-line lookup of the backend service behind a GKE Gateway.

Usage:
    gke-gateway-resolve --gateway my-gateway-name --namespace my-cool-app \
        --project my-gcp-project --region us-central1
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config_loader import load_config_from_env
from .config_validator import validate_log_level
from .exceptions import ConfigurationError
from .service import GatewayResolverService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTIC_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gke-gateway-resolve",
        description="Find the backend service GKE created for a Kubernetes Gateway.",
    )
    parser.add_argument("--gateway", required=True, help="Name of the Kubernetes Gateway resource")
    parser.add_argument("--namespace", required=True, help="Namespace the Gateway is in")
    parser.add_argument("--project", help="Project of the load balancer (default: GKE_GATEWAY_PROJECT)")
    parser.add_argument(
        "--region",
        help="Region of the load balancer (default: GKE_GATEWAY_REGION, otherwise global)",
    )
    parser.add_argument("--timeout", type=float, help="Overall lookup deadline in seconds")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main(argv: Optional[List[str]] = None, service: Optional[GatewayResolverService] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if service is None:
            config = load_config_from_env()
            if args.log_level:
                config.log_level = validate_log_level(args.log_level, "--log-level")
            configure_logging(config.log_level)
            service = GatewayResolverService(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    response = service.lookup(
        gateway=args.gateway,
        namespace=args.namespace,
        project=args.project,
        region=args.region,
        timeout=args.timeout,
    )

    print(json.dumps(response.to_dict(), indent=2))

    if response.has_error():
        return EXIT_DIAGNOSTIC_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
