# Generated manually for services, projects and posts

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def seo_fields():
    return [
        ('seo_title', models.CharField(blank=True, max_length=255, null=True)),
        ('seo_title_vi', models.CharField(blank=True, max_length=255, null=True)),
        ('seo_description', models.TextField(blank=True, null=True)),
        ('seo_description_vi', models.TextField(blank=True, null=True)),
        ('seo_keywords', models.TextField(blank=True, null=True)),
        ('seo_keywords_vi', models.TextField(blank=True, null=True)),
    ]


def gallery_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('position', models.IntegerField(default=0)),
        ('is_primary', models.BooleanField(default=False)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('media', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *seo_fields(),
                ('title', models.CharField(max_length=255)),
                ('title_vi', models.CharField(blank=True, max_length=255, null=True)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description_html', models.TextField(blank=True, default='')),
                ('description_html_vi', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('image', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='service_images', to='media.asset')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'services',
            },
        ),
        migrations.CreateModel(
            name='ServiceAsset',
            fields=[
                *gallery_fields(),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='content.service')),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='service_gallery', to='media.asset')),
            ],
            options={
                'db_table': 'service_assets',
                'ordering': ['position'],
                'unique_together': {('service', 'asset')},
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *seo_fields(),
                ('title', models.CharField(max_length=255)),
                ('title_vi', models.CharField(blank=True, max_length=255, null=True)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('content_html', models.TextField(blank=True, default='')),
                ('content_html_vi', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('image', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='project_images', to='media.asset')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'projects',
            },
        ),
        migrations.CreateModel(
            name='ProjectAsset',
            fields=[
                *gallery_fields(),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='content.project')),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='project_gallery', to='media.asset')),
            ],
            options={
                'db_table': 'project_assets',
                'ordering': ['position'],
                'unique_together': {('project', 'asset')},
            },
        ),
        migrations.CreateModel(
            name='Post',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *seo_fields(),
                ('title', models.CharField(max_length=255)),
                ('title_vi', models.CharField(blank=True, max_length=255, null=True)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('excerpt', models.TextField(blank=True, null=True)),
                ('excerpt_vi', models.TextField(blank=True, null=True)),
                ('content_html', models.TextField(blank=True, default='')),
                ('content_html_vi', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('featured_image', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='post_images', to='media.asset')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'posts',
            },
        ),
        migrations.CreateModel(
            name='PostAsset',
            fields=[
                *gallery_fields(),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='content.post')),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='post_gallery', to='media.asset')),
            ],
            options={
                'db_table': 'post_assets',
                'ordering': ['position'],
                'unique_together': {('post', 'asset')},
            },
        ),
    ]
