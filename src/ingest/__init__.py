"""Record ingestion.

The ingestion layer turns the raw text of a user-supplied file into an ordered tuple of
`IncomeRecord` objects by trying several format-specific strategies in a fixed order.
"""
