from django.db import models


class Role(models.TextChoices):
    USER = "usuario", "Usuario"
    ADMIN = "admin", "Administrador"
