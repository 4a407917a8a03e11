# =============================================================================
# substock_core/ui/print_layout.py
# Printable A4 requisition document
# =============================================================================

from __future__ import annotations
from html import escape

from substock_core.config import SubStockConfig
from substock_core.inventory import RequisitionDocument

PRINT_CSS = """
<style>
.req-sheet { width: 210mm; min-height: 297mm; padding: 20mm; background: #fff; color: #000;
             font-family: 'Sarabun', 'Segoe UI', sans-serif; box-sizing: border-box; }
.req-sheet h1 { text-align: center; font-size: 1.5rem; margin: 0; }
.req-sheet h2 { text-align: center; font-size: 1.1rem; font-weight: normal; margin: 0.3rem 0 1.5rem; }
.req-meta { display: flex; justify-content: space-between; border-bottom: 1px solid #ccc;
            padding-bottom: 0.8rem; margin-bottom: 1rem; }
.req-meta p { margin: 0.2rem 0; }
.req-table { width: 100%; border-collapse: collapse; font-size: 0.85rem; }
.req-table th, .req-table td { border: 1px solid #ccc; padding: 4px 6px; }
.req-table th { background: #f3f4f6; }
.num { text-align: right; }
.center { text-align: center; }
.req-signatures { display: flex; justify-content: space-around; margin-top: 3rem; }
.no-print { margin-top: 1rem; padding: 0.4rem 1.2rem; }
@media print { .no-print { display: none; } body * { visibility: hidden; } .req-sheet, .req-sheet * { visibility: visible; }
               .req-sheet { position: absolute; left: 0; top: 0; } }
</style>
"""


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _qty(value: float) -> str:
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


def render_requisition_html(
    document: RequisitionDocument,
    settings: SubStockConfig = None,
) -> str:
    """Full HTML of the requisition sheet for st.components.v1.html."""
    settings = settings or SubStockConfig()

    rows = "\n".join(
        "<tr>"
        f'<td class="center">{i}</td>'
        f"<td>{escape(item.name)}<br><small>{escape(item.code)} | Lot {escape(item.lot_no)}</small></td>"
        f'<td class="center">{escape(item.pack)}</td>'
        f'<td class="num">{_qty(item.balance)}</td>'
        f'<td class="num"><b>{_qty(item.manual_order)}</b></td>'
        f'<td class="num">{_money(item.price)}</td>'
        f'<td class="num">{_money(item.line_total)}</td>'
        "</tr>"
        for i, item in enumerate(document.items, start=1)
    )

    return f"""{PRINT_CSS}
<div class="req-sheet">
  <h1>Drug Requisition (Warehouse)</h1>
  <h2>{escape(settings.hospital_name)}</h2>
  <div class="req-meta">
    <div>
      <p><b>Document No.:</b> {escape(document.doc_id)}</p>
      <p><b>Date:</b> {document.created_at:%d/%m/%Y}</p>
      <p><b>Department:</b> {escape(settings.department)}</p>
    </div>
    <div style="text-align:right">
      <p><b>Requested by:</b> {escape(document.requester)}</p>
      <p><b>Type:</b> {escape(settings.requisition_type)}</p>
    </div>
  </div>
  <table class="req-table">
    <thead><tr>
      <th>#</th><th>Item</th><th>Unit</th><th>Balance</th>
      <th>Quantity</th><th>Unit price</th><th>Amount</th>
    </tr></thead>
    <tbody>
{rows}
    </tbody>
    <tfoot><tr>
      <td colspan="6" class="num"><b>Total</b></td>
      <td class="num"><b>{_money(document.total)}</b></td>
    </tr></tfoot>
  </table>
  <div class="req-signatures">
    <div class="center">.................................<br>Requester</div>
    <div class="center">.................................<br>Approver</div>
    <div class="center">.................................<br>Dispenser</div>
  </div>
</div>
<button class="no-print" onclick="window.print()">Print</button>
"""
