from typing import Generic, Iterable, Optional, Sequence, Type, TypeVar

from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Find/create/update/delete over one model; the only persistence seam services see."""

    ordering: Sequence[str] = ()

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self):
        qs = self.model.objects.all()
        return qs.order_by(*self.ordering) if self.ordering else qs

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self._base_queryset().filter(**filters)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        fields = list(data.keys())
        if fields:
            fields += [
                f.name
                for f in self.model._meta.concrete_fields
                if getattr(f, "auto_now", False) and f.name not in data
            ]
        obj.save(update_fields=fields or None)
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
