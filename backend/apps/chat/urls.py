from django.urls import path
from .views import ChatMessagesView

urlpatterns = [
    path("messages/", ChatMessagesView.as_view(), name="api-chat-messages"),
]
