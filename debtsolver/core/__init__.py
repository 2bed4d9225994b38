"""
Core value types: money, transactions and the error taxonomy.

Independent of the ledger and the settlement engine built on top of them.
"""
