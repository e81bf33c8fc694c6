# Services package init
"""
Zogakzip Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession, apply business rules, and
       return response schemas or raise application exceptions.

Service Inventory:
    - access:          password gate (verify_secret, ensure_public)
    - pagination:      offset pagination, sort keys, counts
    - TagService:      find-or-create tags, link/replace/read post tags
    - GroupService:    groups, group likes, cascading group delete
    - PostService:     posts, post likes, cascading post delete, post counters
    - CommentService:  comments and comment counters
    - FileService:     image upload storage and serving
"""
