from django.db import models


class Message(models.Model):
    user_id = models.BigIntegerField()
    username = models.CharField(max_length=150)
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [models.Index(fields=["-created_at"], name="message_created_idx")]

    def __str__(self):
        return f"{self.username}: {self.text[:40]}"
