"""
FairShare - Bill splitter with proportional discounts and shared fees

python3 main.py                          # Interactive CLI mode (itemized bill)
python3 main.py --mode flat              # Flat before/after discount split
python3 main.py --summary                # Show the current split and exit
python3 main.py --export-image           # Save the receipt PNG and exit
python3 main.py --help                   # Show help
"""

import sys
import argparse

from bill_session import BillSession
from bill_store import BillStore, LocalStorage
from cli_interface import FairShareCLI
from config import DEFAULT_MODE, STORAGE_PATH
from constants import MODES
from receipt_export import ReceiptExportError, export_receipt


def build_session(mode: str, storage_path: str) -> BillSession:
    """Create a session bound to the local storage file"""
    return BillSession(BillStore(LocalStorage(storage_path), mode))


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='FairShare - Bill splitter with proportional discounts and shared fees',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fairshare                       # Interactive mode
  fairshare --mode flat           # Before/after total split
  fairshare --summary             # Print current split
  fairshare --export-image        # Save receipt image
        """
    )

    parser.add_argument(
        '--mode',
        choices=MODES,
        default=DEFAULT_MODE if DEFAULT_MODE in MODES else MODES[0],
        help='Bill variant (default: itemized)'
    )
    parser.add_argument(
        '--storage',
        default=STORAGE_PATH,
        help=f'Local storage file (default: {STORAGE_PATH})'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Show the current split and exit'
    )
    parser.add_argument(
        '--export-image',
        action='store_true',
        help='Save the receipt image and exit'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='FairShare 1.0'
    )

    args = parser.parse_args(argv)

    session = build_session(args.mode, args.storage)
    cli = FairShareCLI(session)

    if args.summary or args.export_image:
        if args.summary:
            cli.display_results()
        if args.export_image:
            try:
                path = export_receipt(session.bill, session.allocation(), session.mode)
                print(f"✅ Receipt saved to {path}")
            except ReceiptExportError as e:
                print(f"❌ Export failed: {e}")
                return 1
        return 0

    cli.run()
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ An error occurred: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    run()
