# Services package init
"""
BlackPeopleEats Backend — Services Layer
==========================================

Service Inventory:
    - FeedService: restaurants, users, follows and posts (one statement each)
    - PaymentService: Stripe checkout session, mock URL without a key
    - HighlightsProvider (abstract): city highlights capability
    - GeminiHighlightsService: Gemini-backed highlights and search
    - FallbackHighlightsService: wraps a provider, serves the static table on failure
"""
