"""
Customer Context Store

Holds actual customer field values per context name. Values are handed out
one context at a time; no accessor returns every context at once.
"""

import logging
from typing import Dict, List, Mapping, Optional

from app.utils import is_blank

logger = logging.getLogger(__name__)

CUSTOMER_DATA_HEADER = "## Current customer data (for this context)"
CUSTOMER_DATA_USAGE = "Answer only from the data below."


class CustomerContextStore:
    """Mutable mapping of context name -> field name -> value (insertion ordered)."""

    def __init__(self, data: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._data: Dict[str, Dict[str, str]] = {}
        for name, fields in (data or {}).items():
            self.put_context(name, fields)

    def put_context(self, context_name: str, data: Optional[Mapping[str, str]]) -> None:
        """Set or replace all data for a context (e.g. "balance_and_usage", "loans")."""
        if is_blank(context_name):
            logger.warning("Ignoring customer data for blank context name")
            return
        self._data[context_name] = dict(data or {})

    def put(self, context_name: str, field: str, value: str) -> None:
        """Set a single field in a context, creating the context if missing."""
        if is_blank(context_name):
            logger.warning(f"Ignoring field '{field}' for blank context name")
            return
        self._data.setdefault(context_name, {})[field] = value

    def get(self, context_name: Optional[str]) -> Dict[str, str]:
        """Copy of the field map for one context, or {} if absent."""
        if context_name is None:
            return {}
        return dict(self._data.get(context_name, {}))

    def context_names(self) -> List[str]:
        return list(self._data)

    def prompt_section_for_context(self, context_name: Optional[str]) -> str:
        """
        Render the non-blank fields of one context as a bulleted list.

        Args:
            context_name: Context selected by classification

        Returns:
            Section text, or "" if the context has no non-blank data
        """
        fields = [
            (field, value)
            for field, value in self.get(context_name).items()
            if not is_blank(value)
        ]
        if not fields:
            return ""

        lines = [
            f"{CUSTOMER_DATA_HEADER}\n\n",
            f"{CUSTOMER_DATA_USAGE}\n\n",
            f"### {context_name}\n",
        ]
        for field, value in fields:
            lines.append(f"- {field}: {value}\n")
        return "".join(lines)


def demo_customer_store() -> CustomerContextStore:
    """
    Demo store with balance_and_usage and loans data.

    In production, replace with a store that fetches only the relevant context
    from your database.
    """
    store = CustomerContextStore()
    store.put_context(
        "balance_and_usage",
        {
            "customer_id": "CUST-1001",
            "plan_name": "Standard (5GB/day, 56-day)",
            "balance": "₹47",
            "data_remaining": "3.2 GB (resets at midnight)",
            "data_used": "1.8 GB today",
            "talk_time_used": "120 minutes this month",
            "validity_end_date": "2025-03-15",
            "last_recharge_date": "2025-02-01",
            "last_recharge_amount": "₹299",
            "active_offers": "None",
            "call_history_summary": "Last 5: 2 min out, 1 min in, 0.5 min out, 3 min in, 1 min out",
        },
    )
    store.put_context(
        "loans",
        {
            "customer_id": "CUST-1001",
            "has_active_loan": "true",
            "loan_type": "Device loan",
            "outstanding_amount": "₹4,200",
            "emi_amount": "₹700",
            "next_emi_date": "2025-03-01",
            "loan_tenure_months": "6",
            "eligibility_for_advance": "Yes (bill advance up to ₹500)",
        },
    )
    return store
