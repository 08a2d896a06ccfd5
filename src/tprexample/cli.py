"""Command-line interface for tpr-example.

This module serves as the entrypoint for the tpr-example application.
"""

import argparse
import logging
import sys

from tprexample import __description__, __version__
from tprexample.config import ExampleConfig
from tprexample.errors import TprExampleError
from tprexample.kubernetes.connection import KubernetesConnection
from tprexample.manager import ExampleResourceManager


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: Whether to enable verbose logging.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=log_level, format=log_format, stream=sys.stdout)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command-line arguments to parse. If None, sys.argv will be used.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(prog="tpr-example", description=__description__)

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "--kubeconfig",
        help="Path to a kube config. Only required if out-of-cluster (overrides TPR_EXAMPLE_KUBECONFIG)",
    )

    parser.add_argument("--context", help="Kubeconfig context to use (overrides TPR_EXAMPLE_CONTEXT)")

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the tpr-example application.

    Args:
        args: Command-line arguments. If None, sys.argv will be used.

    Returns:
        Exit code.
    """
    try:
        parsed_args = parse_args(args)
        setup_logging(parsed_args.verbose)
        logger = logging.getLogger(__name__)

        # Create config from environment variables
        config = ExampleConfig.from_env()

        # Override with command-line arguments
        if parsed_args.kubeconfig is not None:
            config.kubeconfig = parsed_args.kubeconfig.strip()
        if parsed_args.context:
            config.context = parsed_args.context

        logger.info(
            f"Configuration: kubeconfig={config.kubeconfig or 'in-cluster'}, "
            f"context={config.context or 'current'}, "
            f"establish_timeout={config.establish_timeout}s"
        )

        connection = KubernetesConnection.from_kubeconfig(config.kubeconfig, config.context)
        manager = ExampleResourceManager(connection, establish_timeout=config.establish_timeout)
        manager.run()

    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Interrupted by user")
    except TprExampleError as e:
        logging.getLogger(__name__).error(f"{type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logging.getLogger(__name__).exception(f"An unexpected error occurred: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
