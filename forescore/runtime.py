from __future__ import annotations

from forescore.service import SettlementService

service = SettlementService()
