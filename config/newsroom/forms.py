from django import forms

from .filters import STATUS_ALL
from .models import Article, ArticleStatus, Comment


class ArticleFilterForm(forms.Form):
    """Query-string filters of the dashboard article list."""

    STATUS_CHOICES = [(STATUS_ALL, 'All statuses')] + list(ArticleStatus.choices)
    TRENDING_CHOICES = [('', 'Any'), ('true', 'Trending'), ('false', 'Not trending')]

    q = forms.CharField(required=False, label='Search')
    status = forms.ChoiceField(choices=STATUS_CHOICES, required=False, initial=STATUS_ALL)
    trending = forms.ChoiceField(choices=TRENDING_CHOICES, required=False)


class ArticleForm(forms.ModelForm):
    keywords = forms.CharField(
        required=False,
        help_text='Comma-separated SEO keywords',
    )

    class Meta:
        model = Article
        fields = [
            'title', 'slug', 'excerpt', 'content', 'featured_image',
            'category', 'author', 'tags', 'status', 'featured', 'trending',
            'read_time', 'meta_title', 'meta_description', 'keywords',
        ]
        widgets = {
            'content': forms.Textarea(attrs={'class': 'rich-text-editor', 'rows': 20}),
            'excerpt': forms.Textarea(attrs={'rows': 3}),
            'meta_description': forms.Textarea(attrs={'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        keywords = self.initial.get('keywords')
        if isinstance(keywords, list):
            self.initial['keywords'] = ', '.join(keywords)

    def clean_keywords(self):
        raw = self.cleaned_data.get('keywords') or ''
        return [word.strip() for word in raw.split(',') if word.strip()]


class CommentForm(forms.ModelForm):
    """Reader comment; ``parent`` may only point at an approved comment of the same article."""

    class Meta:
        model = Comment
        fields = ['author_name', 'content', 'parent']
        labels = {'author_name': 'Your name', 'content': 'Comment'}
        widgets = {
            'content': forms.Textarea(attrs={'rows': 4, 'maxlength': 2000}),
            'parent': forms.HiddenInput(),
        }

    def __init__(self, *args, article=None, **kwargs):
        super().__init__(*args, **kwargs)
        if article is not None:
            self.fields['parent'].queryset = article.comments.filter(approved=True)
        self.fields['parent'].required = False

    def clean_author_name(self):
        name = self.cleaned_data['author_name'].strip()
        if not name:
            raise forms.ValidationError('Please enter your name.')
        return name

    def clean_content(self):
        content = self.cleaned_data['content'].strip()
        if not content:
            raise forms.ValidationError('Comment cannot be empty.')
        if len(content) > 2000:
            raise forms.ValidationError('Comment is too long (2000 characters max).')
        return content


class CommentModerationFilterForm(forms.Form):
    FILTER_CHOICES = [('all', 'All'), ('approved', 'Approved'), ('pending', 'Pending')]

    filter = forms.ChoiceField(choices=FILTER_CHOICES, required=False, initial='all')
