from coach.client.session import Entry, InterviewSession, MIN_TRANSCRIPT_FOR_ANALYSIS

__all__ = ["Entry", "InterviewSession", "MIN_TRANSCRIPT_FOR_ANALYSIS"]
