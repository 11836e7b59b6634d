"""
Core Marketplace Contracts
==========================

Solidity contracts deployed by scripts/deployment:
- NalndaToken: ERC20 token used for marketplace purchases
- MarketplaceFactory: Factory for per-author book marketplaces
"""

NALNDA_TOKEN = "NalndaToken"
MARKETPLACE_FACTORY = "MarketplaceFactory"

__all__ = ['NALNDA_TOKEN', 'MARKETPLACE_FACTORY']
