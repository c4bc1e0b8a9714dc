"""
Static list of markets shown in the frontend.

Display only: uploads and lookups accept any market string.
"""

from typing import List

from app.schemas.market import MarketDescriptor


MARKETS: List[MarketDescriptor] = [
    MarketDescriptor(name="Разнопромет"),
    MarketDescriptor(name="Market2", locations=["Центар", "Аеродром", "Карпош"]),
    MarketDescriptor(name="Market3"),
]
