# sheets_client.py
import logging
from typing import List, Optional

import gspread
from google.oauth2.service_account import Credentials

from config import ServiceAccount

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsError(Exception):
    pass


class SheetsClient:
    def __init__(self, account: ServiceAccount):
        self.account = account

    def _credentials(self) -> Credentials:
        info = {
            "type": "service_account",
            "project_id": self.account.project_id,
            "client_email": self.account.client_email,
            "private_key": self.account.private_key,
            "token_uri": TOKEN_URI,
        }
        return Credentials.from_service_account_info(info, scopes=list(self.account.scopes))

    def get_values(self, spreadsheet_id: str, range_name: str) -> Optional[List[List[str]]]:
        """Fetch raw cell values for one range.

        Returns None when the API response has no ``values`` field, which is
        how Sheets reports an empty range.
        """
        try:
            client = gspread.authorize(self._credentials())
            sheet = client.open_by_key(spreadsheet_id)
            resp = sheet.values_get(range_name)
        except Exception as e:
            raise SheetsError(f"Failed to fetch {range_name} from {spreadsheet_id}: {e}") from e
        return resp.get("values")
