"""Receipt formatting utilities."""

from .checkout import SaleReceipt
from .ledger import format_money


def format_receipt(receipt: SaleReceipt) -> str:
    """Format a human-readable receipt."""
    lines = []

    lines.append("=" * 40)
    lines.append("           RECEIPT")
    lines.append("=" * 40)
    lines.append(f"Customer: {receipt.customer_name}")
    lines.append("-" * 40)

    for item in receipt.lines:
        lines.append(
            f"{item.quantity} x {item.name} @ ${format_money(item.price)} = ${format_money(item.line_total)}"
        )

    lines.append("-" * 40)
    lines.append(f"TOTAL:                 ${receipt.total}")
    lines.append("-" * 40)
    lines.append(f"Points Earned:         {receipt.points_earned}")
    lines.append(f"Total Rewards Points:  {receipt.rewards_total}")
    lines.append("=" * 40)
    lines.append("     Thank you for your purchase!")
    lines.append("=" * 40)

    return "\n".join(lines)
