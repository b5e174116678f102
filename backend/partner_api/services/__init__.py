"""
Partner API - Services Layer
=============================

Service Inventory:
    - PartnerHandler (abstract): contract the /partners routes depend on
    - PartnerService: SQLAlchemy implementation of PartnerHandler
    - UploadService: filename generation and local disk storage of uploads
    - MultipartIngestion: declared-field multipart parsing feeding UploadService
"""
