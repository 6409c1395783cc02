"""
Forms for the admin console.
"""
from django import forms

from .conf import blog_settings
from .models import Category, Post


class PostForm(forms.ModelForm):
    """Create or edit a post; tags are entered as a comma-separated list."""

    tags = forms.CharField(
        required=False,
        help_text="Comma-separated, e.g. books, reading notes",
    )

    class Meta:
        model = Post
        fields = [
            "title",
            "slug",
            "content",
            "excerpt",
            "cover_image",
            "category",
            "published",
            "created_at",
        ]
        widgets = {
            "content": forms.Textarea(attrs={"rows": 24, "class": "editor"}),
            "excerpt": forms.Textarea(attrs={"rows": 3}),
            "created_at": forms.DateTimeInput(
                attrs={"type": "datetime-local"},
                format="%Y-%m-%dT%H:%M",
            ),
        }
        help_texts = {
            "slug": "Leave blank to generate from the title.",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["created_at"].input_formats = ["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"]
        if self.instance.pk:
            self.initial["tags"] = ", ".join(self.instance.tag_names)

    def clean_tags(self):
        raw = self.cleaned_data.get("tags", "")
        return [name.strip() for name in raw.replace("，", ",").split(",") if name.strip()]

    def save(self, commit=True):
        post = super().save(commit=commit)
        if commit:
            post.set_tags(self.cleaned_data["tags"])
        return post


class CategoryForm(forms.ModelForm):

    class Meta:
        model = Category
        fields = ["name", "slug"]


class SiteSettingsForm(forms.Form):
    """One field per key in SITE_SETTING_KEYS."""

    LABELS = {
        "site_title": "Site title",
        "site_description": "Site description",
        "author_name": "Author name",
        "author_email": "Author email",
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for key in blog_settings.SITE_SETTING_KEYS:
            if key == "author_email":
                field = forms.EmailField(required=False)
            elif key == "site_description":
                field = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 3}))
            else:
                field = forms.CharField(required=False)
            field.label = self.LABELS.get(key, key.replace("_", " ").capitalize())
            self.fields[key] = field


class AssetUploadForm(forms.Form):
    file = forms.FileField()
