"""
BookScout — swipe-card book discovery.

- recommender/: Book and ChoiceEvent models, recency-weighted scoring, queue
- server/: FastAPI backend that logs swipe choices to a JSON file
- client/: catalog, session state, gesture recognizer, controller, terminal UI
"""

__version__ = "1.0.0"
