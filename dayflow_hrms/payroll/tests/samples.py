from decimal import Decimal

# 50000 basic -> 21600 earnings, 71600 gross, 8592 + 200 = 8792 deductions, 62808 net
EXAMPLE_COMPONENTS = [
    {"name": "HRA", "kind": "earning", "amount": Decimal("40"), "is_percentage": True},
    {"name": "Transport", "kind": "earning", "amount": Decimal("1600"), "is_percentage": False},
    {"name": "PF", "kind": "deduction", "amount": Decimal("12"), "is_percentage": True},
    {"name": "ProfTax", "kind": "deduction", "amount": Decimal("200"), "is_percentage": False},
]

TEN_FLAT_TAXES = [
    {"name": "Tax", "kind": "deduction", "amount": Decimal("150"), "is_percentage": False}
    for _ in range(10)
]
