# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest
from datetime import datetime
from unittest.mock import MagicMock

from substock_core.inventory import ConfigSnapshot, LedgerRecord, MovementKind, Requester


NOW = datetime(2024, 6, 1, 12, 0, 0)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def now():
    """Fixed evaluation time for classification"""
    return NOW


@pytest.fixture
def make_record():
    """Factory for ledger records with sensible defaults"""
    def _make(code="ABC123", lot_no="L1", amount=100, date="2024-01-01", **kwargs):
        kwargs.setdefault("kind", MovementKind.IN if amount > 0 else MovementKind.OUT)
        kwargs.setdefault("exp_date", "2026-12-31")
        kwargs.setdefault("price", 2.5)
        kwargs.setdefault("name", "Paracetamol 500mg")
        return LedgerRecord(code=code, lot_no=lot_no, amount=amount, date=date, **kwargs)

    return _make


@pytest.fixture
def sample_records(make_record):
    """
    Small ledger:
        ABC123/L1  +100 then -30 (balance 70)
        ABC123/L2  +20 (second lot of the same drug)
        XYZ9/A     +210 then -200 (balance 10, below its minimum)
        EXP1/E     +5, already expired
    """
    return [
        make_record("ABC123", "L1", 100, "2024-01-01", timestamp=1),
        make_record("ABC123", "L2", 20, "2024-01-05", timestamp=2),
        make_record("XYZ9", "A", 210, "2024-01-02", name="Amoxicillin", price=4.0, timestamp=3),
        make_record("ABC123", "L1", -30, "2024-01-10", timestamp=4),
        make_record("XYZ9", "A", -200, "2024-01-20", name="Amoxicillin", price=4.0, timestamp=5),
        make_record("EXP1", "E", 5, "2023-01-01", name="Old syrup", exp_date="2024-01-01", timestamp=6),
    ]


@pytest.fixture
def sample_config():
    return ConfigSnapshot(
        min_stock={"ABC123": 50, "XYZ9": 50},
        cabinets={"ABC123": "A", "XYZ9": "Fridge"},
        requesters=(Requester(id="1", name="Nurse A"), Requester(id="2", name="Nurse B")),
    )


SAMPLE_CSV = (
    "dispno,date,department,code,name,amount,pack,price,lot_no,barcode,exp_date\n"
    "D001,2024-02-01,IPD,ABC123,Paracetamol 500mg,100,box,2.5,L1,885000,2026-12-31\n"
    "D002,2024-02-02,IPD,XYZ9,Amoxicillin,-40,cap,4,A,,2025-06-30\n"
    "\n"
    "short,row\n"
    "D003,,IPD,NEW1,,abc\n"
)


@pytest.fixture
def sample_csv():
    """Export with a blank line, a short row to drop and a row with gaps to default"""
    return SAMPLE_CSV


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def mock_streamlit():
    """Mock Streamlit for testing"""
    import sys

    # Create mock streamlit module
    mock_st = MagicMock()
    mock_st.session_state = {}
    mock_st.secrets = {}
    mock_st.cache_data = lambda f: f
    mock_st.cache_resource = lambda f: f

    # Store original and replace
    original_st = sys.modules.get('streamlit')
    sys.modules['streamlit'] = mock_st

    yield mock_st

    # Restore original
    if original_st:
        sys.modules['streamlit'] = original_st
    else:
        sys.modules.pop('streamlit', None)


def make_supabase_client(pages=None):
    """
    MagicMock Supabase client whose paged reads return ``pages`` in order.

    Works for select().range() with no order(), one order() or two chained.
    """
    client = MagicMock()
    responses = [MagicMock(data=page) for page in (pages or [[]])]
    responses.append(MagicMock(data=[]))

    select = client.table.return_value.select.return_value
    select.range.return_value.execute.side_effect = list(responses)
    select.order.return_value.range.return_value.execute.side_effect = list(responses)
    select.order.return_value.order.return_value.range.return_value.execute.side_effect = list(responses)
    return client


@pytest.fixture
def mock_supabase():
    """Mock Supabase client with an empty table"""
    return make_supabase_client()


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def ledger_row(**overrides):
    """Store row shape as returned by the transactions table"""
    row = {
        "id": "11111111-0000-0000-0000-000000000001",
        "dispno": "D001",
        "date": "2024-01-01",
        "department": "IPD",
        "code": "ABC123",
        "name": "Paracetamol 500mg",
        "amount": 100,
        "pack": "box",
        "price": 2.5,
        "lot_no": "L1",
        "barcode": "885000",
        "exp_date": "2026-12-31",
        "timestamp": 1704067200000,
        "type": "IN",
    }
    row.update(overrides)
    return row


@pytest.fixture
def supabase_factory():
    return make_supabase_client


@pytest.fixture
def row_factory():
    return ledger_row
