# scripts/compute_attendance.py
import argparse
import asyncio
import logging
import sys

from roximity.api.deps import build_attendance_service
from roximity.core.config import settings
from roximity.core.exceptions import AttendanceError
from roximity.db.session import AsyncSessionLocal

logger = logging.getLogger("roximity.scripts.compute_attendance")


async def compute(*, session_id: int, include_devices: list[str], dry_run: bool) -> None:
    async with AsyncSessionLocal() as db:
        service = build_attendance_service(db)
        if dry_run:
            records = await service.evaluate(session_id, include_devices)
        else:
            records = await service.compute(session_id, include_devices)

    for record in records:
        print(
            f"[attendance] session={record.session_id} device={record.device_id} "
            f"cumulative_ms={record.cumulative_duration_ms} "
            f"required_ms={record.required_duration_ms} status={record.status.value}"
        )
    print(f"[attendance] devices={len(records)} saved={not dry_run}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calcula a presença de uma sessão.")
    parser.add_argument("--session-id", type=int, required=True)
    parser.add_argument(
        "--include-device",
        action="append",
        default=[],
        dest="include_devices",
        help="Dispositivo que deve aparecer mesmo sem detecção (pode repetir).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Calcula e imprime os registros sem gravar.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    args = parse_args(argv)
    logger.info(
        "Starting attendance run (session_id=%s dry_run=%s)", args.session_id, args.dry_run
    )
    try:
        asyncio.run(
            compute(
                session_id=args.session_id,
                include_devices=args.include_devices,
                dry_run=args.dry_run,
            )
        )
    except AttendanceError as exc:
        logger.error("Attendance run failed: %s", exc.message)
        print(f"[attendance] error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
