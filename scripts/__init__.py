"""
Deployment and Management Scripts
================================

Scripts for deploying the Nalnda marketplace contracts.

Structure:
- deployment/: Contract deployment (NalndaToken, MarketplaceFactory)
"""

__version__ = "1.0.0"
__author__ = "Nalnda Team"
