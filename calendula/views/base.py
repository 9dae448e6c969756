from typing import ClassVar, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ViewIdentity(Protocol):
    """Anything a Template can be bound to."""

    def get_view_slug(self) -> str: ...

    def get_view_label(self) -> str: ...

    def get_inheritance(self) -> Sequence["ViewIdentity"]: ...


class View:
    """Base class for calendar views.

    Subclasses set ``slug`` and ``label``. A view that subclasses another
    concrete view inherits its templates: when ``summary`` has no template
    of its own, the ``list`` template it derives from is used instead.

    Set ``template_path`` to nest the view's templates in a subdirectory,
    e.g. ``template_path = "widgets"`` renders ``widgets/<slug>.html``.
    """

    slug: ClassVar[str] = ""
    label: ClassVar[str] = ""
    template_path: ClassVar[str] = ""

    @classmethod
    def get_view_slug(cls) -> str:
        return cls.slug

    @classmethod
    def get_view_label(cls) -> str:
        return cls.label or cls.slug.replace("-", " ").title()

    @classmethod
    def get_template_slug(cls) -> str:
        return cls.slug

    @classmethod
    def get_template_path(cls) -> str:
        return cls.template_path

    @classmethod
    def get_inheritance(cls) -> list[type["View"]]:
        """Return the concrete views this view derives from, nearest first."""
        ancestors: list[type[View]] = []
        seen = {cls.slug}
        for klass in cls.__mro__[1:]:
            if klass is View or not issubclass(klass, View):
                continue
            if not klass.slug or klass.slug in seen:
                continue
            seen.add(klass.slug)
            ancestors.append(klass)
        return ancestors

    def __repr__(self) -> str:
        return f"{type(self).__name__}(slug={self.slug!r})"
