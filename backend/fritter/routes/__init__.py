# Routes package init
"""
Fritter Backend: API Routes Package
====================================

Route Inventory:
    - users.py:    /api/users, /api/users/session, /api/users/{username}/...
    - freets.py:   /api/freets and its replies, likes and reports
    - replies.py:  /api/replies/{id} and its replies, likes and reports
    - likes.py:    /api/likes (freet likes addressed by body or query)
    - circles.py:  /api/circles
    - health.py:   /health

Routes are thin: resolve the signed-in user, call one or two services,
and wrap the result in a response model with the right status code.
"""
