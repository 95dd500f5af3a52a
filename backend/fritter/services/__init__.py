# Services package init
"""
Fritter Backend: Services Layer
================================

What:  Business rules sitting between routes (HTTP) and models (persistence).
How:   Each service is a stateless class with a module-level singleton.
       Methods take the request's AsyncSession plus domain objects, raise
       exceptions from fritter.exceptions, and flush but never commit; the
       session dependency commits once the handler returns.

Service Inventory:
    - UserService:    registration, sign-in, account update and deletion
    - FollowService:  follow/unfollow, follower and following lists
    - FreetService:   freet listing, feed, visibility, create/edit/delete
    - ReplyService:   threaded replies to freets and replies
    - LikeService:    likes on freets and replies
    - ReportService:  reports and removal past the report threshold
    - CircleService:  circles, membership and circle feeds
    - validation:     content, username, password and id checks
"""
