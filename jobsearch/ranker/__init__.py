"""
Ranker Service

Service for scoring and ordering postings against a candidate's resume.
"""

from .job_ranker import JobRanker, JobScore, JobScorer, recommendation_for, sort_jobs

__all__ = ["JobRanker", "JobScore", "JobScorer", "recommendation_for", "sort_jobs"]
