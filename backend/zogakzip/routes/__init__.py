# Routes package init
"""
Zogakzip Backend — API Routes Package
=======================================

Route Inventory:
    - groups.py:    /api/groups, /api/groups/{groupId}[/private|/like|/is-public]
    - posts.py:     /api/groups/{groupId}/posts, /api/posts/{postId}[/private|/like|/like/private|/is-public]
    - comments.py:  /api/posts/{postId}/comments, /api/comments/{commentId}
    - images.py:    POST /api/image, GET /uploads/{path}
    - health.py:    GET /health
    - params.py:    shared path/query parameter types (id and page bounds)

Routes stay THIN: they extract data from the request, call one service
method and return its result. Status codes for failures come from the
exception handlers in main.py.
"""
