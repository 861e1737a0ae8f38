"""
Job search aggregation services.

Fetches job postings from several external providers, reconciles them into
one canonical shape, removes cross-provider duplicates and ranks the result
against a candidate's resume.
"""
