"""
Partner API - Routes Package
=============================

Route Inventory:
    - partners.py:  POST  /partners               (create partner)
                    GET   /partners               (list partners)
                    GET   /partners/{id}          (partner with service offers)
                    PATCH /partners/{id}          (update, multipart media upload)
    - files.py:     GET   /uploads/{filename}     (serve stored media)
    - health.py:    GET   /health                 (service health check)

Routes stay thin: they extract request data and delegate to the partner
handler or the upload service.
"""
