"""
Django admin configuration for GH News.

Editors manage categories, authors, tags and articles here, and moderate
reader comments. Status actions go
through ``newsroom.publishing`` so first publication stamps ``published_at``
and notifies search engines.
"""

from django.contrib import admin
from django.utils.html import format_html

from .engagement import set_comments_approved
from .models import Article, ArticleStatus, AuthorProfile, Category, Comment, Reaction, Tag
from .publishing import announce_published, prepare_for_save, set_status


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'color_swatch', 'icon', 'updated_at']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}

    @admin.display(description='Color')
    def color_swatch(self, obj):
        return format_html(
            '<span style="display:inline-block;width:1em;height:1em;background:{}"></span> {}',
            obj.color, obj.color,
        )


@admin.register(AuthorProfile)
class AuthorProfileAdmin(admin.ModelAdmin):
    list_display = ['name', 'title', 'role', 'user', 'created_at']
    list_filter = ['role']
    search_fields = ['name', 'title', 'user__username', 'user__email']
    raw_id_fields = ['user']

    fieldsets = (
        (None, {
            'fields': ('user', 'name', 'title', 'role'),
        }),
        ('Profile', {
            'fields': ('bio', 'avatar'),
        }),
        ('Social', {
            'fields': ('twitter', 'facebook', 'linkedin'),
            'classes': ('collapse',),
        }),
    )


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug']
    search_fields = ['name']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """Admin for writing, publishing and curating articles."""

    list_display = [
        'title_short', 'category', 'author', 'status',
        'featured', 'trending', 'views', 'published_at',
    ]
    list_filter = ['status', 'featured', 'trending', 'category', 'published_at']
    search_fields = ['title', 'author__name']
    list_editable = ['featured', 'trending']
    prepopulated_fields = {'slug': ('title',)}
    filter_horizontal = ['tags']
    readonly_fields = ['views', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    actions = ['publish', 'archive', 'move_to_draft', 'mark_trending', 'unmark_trending']

    fieldsets = (
        (None, {
            'fields': ('title', 'slug', 'status', 'category', 'author', 'tags'),
        }),
        ('Content', {
            'fields': ('excerpt', 'content', 'featured_image', 'read_time'),
        }),
        ('Promotion', {
            'fields': ('featured', 'trending', 'views'),
        }),
        ('SEO', {
            'fields': ('meta_title', 'meta_description', 'keywords'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('published_at', 'created_at', 'updated_at'),
        }),
    )

    @admin.display(description='Title')
    def title_short(self, obj):
        return obj.title[:80] + '…' if len(obj.title) > 80 else obj.title

    def save_model(self, request, obj, form, change):
        previous_status = form.initial.get('status') if change else None
        became_published = prepare_for_save(obj, previous_status)
        super().save_model(request, obj, form, change)
        if became_published:
            announce_published(obj)

    @admin.action(description='Publish selected articles')
    def publish(self, request, queryset):
        changed = set_status(queryset, ArticleStatus.PUBLISHED)
        self.message_user(request, f"Published {changed} article(s).")

    @admin.action(description='Archive selected articles')
    def archive(self, request, queryset):
        changed = set_status(queryset, ArticleStatus.ARCHIVED)
        self.message_user(request, f"Archived {changed} article(s).")

    @admin.action(description='Move selected articles to draft')
    def move_to_draft(self, request, queryset):
        changed = set_status(queryset, ArticleStatus.DRAFT)
        self.message_user(request, f"Moved {changed} article(s) to draft.")

    @admin.action(description='Mark selected as trending')
    def mark_trending(self, request, queryset):
        updated = queryset.update(trending=True)
        self.message_user(request, f"Marked {updated} article(s) as trending.")

    @admin.action(description='Remove trending flag')
    def unmark_trending(self, request, queryset):
        updated = queryset.update(trending=False)
        self.message_user(request, f"Removed trending flag from {updated} article(s).")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Moderation queue for reader comments."""

    list_display = ['author_name', 'content_short', 'article', 'parent', 'approved', 'created_at']
    list_filter = ['approved', 'created_at']
    search_fields = ['author_name', 'content', 'article__title']
    raw_id_fields = ['article', 'parent', 'user']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    actions = ['approve', 'unapprove']

    @admin.display(description='Comment')
    def content_short(self, obj):
        return obj.content[:80] + '…' if len(obj.content) > 80 else obj.content

    @admin.action(description='Approve selected comments')
    def approve(self, request, queryset):
        updated = set_comments_approved(queryset, True)
        self.message_user(request, f"Approved {updated} comment(s).")

    @admin.action(description='Unapprove selected comments')
    def unapprove(self, request, queryset):
        updated = set_comments_approved(queryset, False)
        self.message_user(request, f"Unapproved {updated} comment(s).")


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ['article', 'type', 'session_id', 'created_at']
    list_filter = ['type']
    search_fields = ['article__title', 'session_id']
    raw_id_fields = ['article']
