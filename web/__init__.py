"""
Web application package for the tic-tac-toe engine.

Provides a FastAPI-based REST API that a browser front end calls for the
computer's move. Serve with: uvicorn web.app:app
"""
