"""
Session Logger - Records game outcomes to file
Only logs results (roster refreshes, joins, decrypted cells), never keys or signatures
"""
import os
from datetime import datetime
from typing import Optional

from fogofsecrets.config import UI_CONFIG
from fogofsecrets.model import RosterSnapshot, RosterSummary


class SessionLogger:
    """Logs session events to file"""

    def __init__(self, session_address: Optional[str], log_dir: Optional[str] = None):
        self.log_dir = log_dir or UI_CONFIG["log_dir"]
        self.log_file = os.path.join(self.log_dir, "session.log")

        # Create logs directory if not exists
        os.makedirs(self.log_dir, exist_ok=True)

        # Initialize/clear log file
        with open(self.log_file, 'w', encoding='utf-8') as f:
            f.write("=== Fog of Secrets Session Log ===\n")
            f.write(f"Wallet: {session_address or 'not connected'}\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write("=" * 50 + "\n\n")

    def log(self, message: str):
        """Write a log message with timestamp"""
        timestamp = datetime.now().strftime('%H:%M:%S')
        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write(f"[{timestamp}] {message}\n")

    def log_section(self, title: str):
        """Write a section header"""
        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write("\n" + "=" * 50 + "\n")
            f.write(f"{title}\n")
            f.write("=" * 50 + "\n")

    def log_roster(self, snapshot: RosterSnapshot, summary: RosterSummary):
        self.log(
            f"Roster refreshed: {summary.total} players "
            f"({summary.encrypted} encrypted, {summary.public} public) "
            f"on a {snapshot.bounds.total_cells}-cell map"
        )

    def log_join(self, receipt: dict):
        self.log_section("Joined the map")
        self.log(f"Transaction: {receipt.get('transactionHash')}")
        self.log(f"Block: {receipt.get('blockNumber')}")

    def log_decrypted_position(self, address: str, cell: int):
        self.log_section("Position decrypted")
        self.log(f"  → {address} is in cell #{cell}")

    def log_error(self, message: str):
        self.log(f"ERROR: {message}")
