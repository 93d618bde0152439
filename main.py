import logging
import sys

# Configuration
from config import SchedulerConfig, load_scheduler_config

# Scheduler components
from scheduler.errors import SchedulerError
from scheduler.infrastructure.message_broker import MessageBroker
from scheduler.service import SchedulerService

# Analyzer and live monitor
from analyzer.dispatch_statistics import DispatchStatistics
from visualizer.server import VisualizerServer

logger = logging.getLogger("elvsched")


def configure_logging(config: SchedulerConfig):
    logging.basicConfig(level=config.logging.level.upper(), format=config.logging.format)


def run_scheduler(config_path=None):
    """
    Run the scheduler until interrupted

    Args:
        config_path: Path to scheduler configuration YAML file
            (built-in defaults when None)

    Returns:
        Process exit code
    """
    config = load_scheduler_config(config_path) if config_path else SchedulerConfig()
    configure_logging(config)
    logger.info("Scheduler Config: %s", config_path or "<defaults>")

    broker = MessageBroker()

    # --- Telemetry ---
    websocket_server = None
    if config.monitor.enabled:
        websocket_server = VisualizerServer(host=config.monitor.host, port=config.monitor.port)
        websocket_server.start_in_thread()

    statistics = DispatchStatistics(broker.open_broadcast_pipe(), websocket_server=websocket_server)
    statistics.set_metadata(config.to_dict())
    statistics.start_listening()

    exit_code = 0
    try:
        with SchedulerService(config, broker=broker) as service:
            service.start()
            service.wait()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except SchedulerError as e:
        # StartupTimeout and TransportFailure end the process
        logger.error("Scheduler stopped: %s", e)
        exit_code = 1
    finally:
        statistics.stop_listening()
        statistics.print_summary()
        if config.monitor.event_log:
            statistics.save_event_log(config.monitor.event_log)

    return exit_code


def main():
    # Accept command line argument for config file
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(run_scheduler(config_path=config_path))


if __name__ == '__main__':
    main()
