"""Feature modules for upload-center.

Each feature keeps its domain objects under entities/ and its
controllers under services/.
"""
