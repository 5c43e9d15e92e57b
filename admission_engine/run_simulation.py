# admission_engine/run_simulation.py
"""Run the Wi-Fi router simulation: N connections shared by M devices."""

import logging
import random
import sys
import threading
import time
from typing import Callable, List, Optional, Sequence

from admission_engine.container import build_admission_system, build_emitters
from admission_engine.core.errors import AdmissionValidationError
from admission_engine.core.events import EventEmitter
from admission_engine.core.models import ClientRecord, ClientState
from admission_engine.core.schemas import SimulationSummary
from admission_engine.core.validation import validate_simulation
from admission_engine.executor.config import LifecycleTimings
from admission_engine.executor.lifecycle import run_client
from admission_engine.infrastructure.config import SimulationSettings
from admission_engine.infrastructure.line_writer import FileLineWriter

logger = logging.getLogger(__name__)


def prompt_int(question: str, read: Optional[Callable[[str], str]] = None) -> int:
    """
    Ask until the answer parses as an integer.

    Raises:
        EOFError: input closed before a number was given
    """
    read = read or input
    while True:
        answer = read(question)
        try:
            return int(answer.strip())
        except ValueError:
            logger.warning(f"Not a number: {answer!r}")


def build_clients(total_devices: int, device_types: Sequence[str]) -> List[ClientRecord]:
    """Devices C1..Cn, cycling through the device types."""
    return [
        ClientRecord(client_id=f"C{i + 1}", kind=device_types[i % len(device_types)])
        for i in range(total_devices)
    ]


def run_simulation(
    *,
    max_connections: int,
    total_devices: int,
    device_types: Sequence[str] = ("mobile", "pc", "tablet"),
    timings: LifecycleTimings = LifecycleTimings(),
    stagger_delay_max: float = 0.5,
    emitters: EventEmitter,
    rng: Optional[random.Random] = None,
) -> SimulationSummary:
    """Start one thread per device with staggered starts and wait for all."""
    validate_simulation(
        max_connections=max_connections,
        total_devices=total_devices,
        device_types=device_types,
    )
    rng = rng or random.Random()

    system = build_admission_system(max_connections, emitters)
    clients = build_clients(total_devices, device_types)

    started = time.monotonic()
    threads = []
    for record in clients:
        thread = threading.Thread(
            target=run_client,
            args=(record, system, timings),
            kwargs={"rng": random.Random(rng.random())},
            name=f"client-{record.client_id}",
        )
        thread.start()
        threads.append(thread)
        if stagger_delay_max > 0:
            time.sleep(rng.uniform(0, stagger_delay_max))

    for thread in threads:
        thread.join()

    return SimulationSummary(
        capacity=max_connections,
        total_clients=len(clients),
        disconnected=sum(1 for c in clients if c.state == ClientState.DISCONNECTED),
        cancelled=sum(1 for c in clients if c.cancelled),
        elapsed_seconds=round(time.monotonic() - started, 3),
        final_snapshot=system.snapshot(),
    )


def main():
    """Main entry point."""
    settings = SimulationSettings()

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    max_connections = settings.max_connections
    total_devices = settings.total_devices
    try:
        if max_connections is None:
            max_connections = prompt_int("What is number of WI-FI Connections? ")
        if total_devices is None:
            total_devices = prompt_int("What is number of devices Clients want to connect? ")
    except EOFError:
        logger.error("Invalid input: no answer on stdin")
        sys.exit(2)

    logger.info("=" * 60)
    logger.info("📶 WI-FI ROUTER SIMULATION")
    logger.info("=" * 60)
    logger.info(f"Connections: {max_connections}")
    logger.info(f"Devices: {total_devices}")
    logger.info(f"Output file: {settings.output_path}")
    logger.info("=" * 60)

    try:
        with FileLineWriter(settings.output_path) as writer:
            summary = run_simulation(
                max_connections=max_connections,
                total_devices=total_devices,
                device_types=settings.device_types,
                timings=settings.timings,
                stagger_delay_max=settings.stagger_delay_max,
                emitters=build_emitters(write_line=writer),
            )
    except AdmissionValidationError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)
    except OSError as e:
        logger.error(f"Error creating output file: {e}")
        sys.exit(1)

    logger.info(
        f"Summary: {summary.disconnected} disconnected, {summary.cancelled} cancelled "
        f"of {summary.total_clients} in {summary.elapsed_seconds}s"
    )
    if not summary.all_done:
        logger.error(
            f"{summary.total_clients - summary.disconnected - summary.cancelled} "
            f"device(s) did not finish their lifecycle"
        )
        sys.exit(1)

    logger.info("All devices done!")


if __name__ == "__main__":
    main()
