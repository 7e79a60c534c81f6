# app/models/image.py
"""
Database model for uploaded image metadata.
The bytes themselves live on disk; see app.services.image_store.
"""
import uuid
from tortoise import fields, models


class Image(models.Model):
    """
    Metadata of an uploaded image.
    - name: Original file name supplied by the client
    - type: MIME type (e.g., image/jpeg)
    - size: Stored size in bytes
    - path: Public URL path of the stored file (e.g., /uploads/USERS/13GF64VLEu7SYNv.jpeg)
    - module: Owning module tag (e.g., USERS)
    Rows are created once per successful upload and never modified.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=256)
    type = fields.CharField(max_length=64)
    size = fields.IntField()
    path = fields.CharField(max_length=512)
    module = fields.CharField(max_length=32, index=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "images"
