import sys
import logging

from config import get_settings
from csv_io import write_accounts
from engine import PaymentsEngine

logger = logging.getLogger(__name__)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=settings.log_format,
        stream=sys.stderr,
    )

    if len(argv) != 1:
        print("Usage: payments <transactions.csv> > accounts.csv", file=sys.stderr)
        sys.exit(1)

    filepath = argv[0]
    engine = PaymentsEngine(enforce_client_match=settings.enforce_client_match)
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Failed to read {filepath}: {e}")
        sys.exit(1)

    write_accounts(accounts, sys.stdout)


if __name__ == "__main__":
    main()
