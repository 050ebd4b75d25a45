"""
Client side of the Trip Planner: backend API client, trip store and offline queue.
"""
