import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('slug', models.SlugField(max_length=100, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('color', models.CharField(blank=True, default='#1d4ed8', help_text='CSS colour used for the category badge', max_length=20, verbose_name='Color')),
                ('icon', models.CharField(blank=True, default='', help_text='Icon name shown next to the category', max_length=50, verbose_name='Icon')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Tag',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=60, verbose_name='Name')),
                ('slug', models.SlugField(max_length=60, unique=True, verbose_name='Slug')),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='AuthorProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('bio', models.TextField(blank=True, default='', verbose_name='Bio')),
                ('avatar', models.URLField(blank=True, default='', verbose_name='Avatar URL')),
                ('title', models.CharField(blank=True, default='', max_length=200, verbose_name='Title')),
                ('role', models.CharField(choices=[('admin', 'Admin'), ('editor', 'Editor'), ('moderator', 'Moderator'), ('user', 'User')], default='user', max_length=10, verbose_name='Role')),
                ('twitter', models.CharField(blank=True, default='', max_length=100, verbose_name='Twitter')),
                ('facebook', models.CharField(blank=True, default='', max_length=200, verbose_name='Facebook')),
                ('linkedin', models.CharField(blank=True, default='', max_length=200, verbose_name='LinkedIn')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='author_profile', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Author',
                'verbose_name_plural': 'Authors',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Article',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=300, verbose_name='Title')),
                ('slug', models.SlugField(help_text='Unique URL segment, also the view-tracking key', max_length=300, unique=True, verbose_name='Slug')),
                ('excerpt', models.TextField(blank=True, default='', verbose_name='Excerpt')),
                ('content', models.TextField(help_text='Rich-text HTML body', verbose_name='Content')),
                ('featured_image', models.URLField(blank=True, default='', verbose_name='Featured Image')),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('published', 'Published'), ('archived', 'Archived')], db_index=True, default='draft', max_length=10, verbose_name='Status')),
                ('featured', models.BooleanField(default=False, verbose_name='Featured')),
                ('trending', models.BooleanField(default=False, verbose_name='Trending')),
                ('views', models.PositiveIntegerField(default=0, verbose_name='Views')),
                ('read_time', models.PositiveSmallIntegerField(default=5, verbose_name='Read Time (min)')),
                ('meta_title', models.CharField(blank=True, default='', max_length=300, verbose_name='Meta Title')),
                ('meta_description', models.TextField(blank=True, default='', verbose_name='Meta Description')),
                ('keywords', models.JSONField(blank=True, default=list, help_text='SEO keywords as a JSON list of strings', verbose_name='Keywords')),
                ('published_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Published At')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='articles', to='newsroom.authorprofile', verbose_name='Author')),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='articles', to='newsroom.category', verbose_name='Category')),
                ('tags', models.ManyToManyField(blank=True, related_name='articles', to='newsroom.tag', verbose_name='Tags')),
            ],
            options={
                'verbose_name': 'Article',
                'verbose_name_plural': 'Articles',
                'ordering': ['-published_at', '-created_at'],
                'indexes': [
                    models.Index(fields=['status', '-published_at'], name='article_status_pub_idx'),
                    models.Index(fields=['category', 'status'], name='article_category_status_idx'),
                ],
            },
        ),
    ]
