"""
Trip Planner: collaborative travel itinerary backend and offline-first client.
"""
