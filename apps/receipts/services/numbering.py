"""Sequential receipt numbers, per business."""

RECEIPT_NUMBER_WIDTH = 3


def next_receipt_number(user) -> str:
    """
    Return the next receipt number for a business.

    Numbers count up from the highest numeric receipt number the user has
    issued and are zero-padded to three digits ("001", "002", ... "1000").
    """
    numbers = user.receipts.values_list('receipt_number', flat=True)
    highest = max((int(n) for n in numbers if n and n.isdigit()), default=0)
    return str(highest + 1).zfill(RECEIPT_NUMBER_WIDTH)
