# Routes package init
"""
BlackPeopleEats Backend — API Routes Package
==============================================

Route Inventory:
    - restaurants.py: GET  /api/restaurants, GET /api/sponsors
    - users.py:       GET  /api/users/{id}, POST /api/users/{id}, POST /api/follow
    - posts.py:       GET  /api/posts, POST /api/posts
    - checkout.py:    POST /api/create-checkout-session
    - highlights.py:  GET  /api/highlights, GET /api/search
    - health.py:      GET  /health

Routes are thin: extract input, call a service, shape the response.
"""
