import pytest

from har_extract.paths import (
    MalformedURLError,
    OutputFolderAllocator,
    RESERVED_CHARS,
    build_relative_path,
    sanitize_file_name,
    truncate_file_name,
)


class TestSanitizeFileName:

    def test_replaces_reserved_characters(self):
        assert sanitize_file_name('a<b>c:d"e|f?g*h%i,j!k&l(m)n') == 'a-b-c-d-e-f-g-h-i-j-k-l-m-n'

    def test_leaves_safe_characters(self):
        assert sanitize_file_name('app.min.js') == 'app.min.js'
        assert sanitize_file_name('a=b_c-d') == 'a=b_c-d'

    @pytest.mark.parametrize('name', ['?q=(1)&x=2', 'plain', '%%%', '<<>>', ''])
    def test_is_idempotent(self, name):
        once = sanitize_file_name(name)
        assert sanitize_file_name(once) == once
        assert not RESERVED_CHARS.search(once)


class TestTruncateFileName:

    def test_short_name_unchanged(self):
        assert truncate_file_name('index.html', 250) == 'index.html'

    def test_keeps_extension(self):
        name = 'a' * 300 + '.js'
        truncated = truncate_file_name(name, 250)
        assert len(truncated) == 250
        assert truncated == 'a' * 247 + '.js'

    def test_name_without_extension(self):
        assert truncate_file_name('b' * 20, 10) == 'b' * 10

    def test_extension_longer_than_limit(self):
        assert truncate_file_name('a.' + 'x' * 20, 5) == 'a.xxx'


class TestBuildRelativePath:

    @pytest.mark.parametrize('url', ['https://example.com', 'https://example.com/'])
    def test_site_root_maps_to_index(self, url):
        assert build_relative_path(url) == 'index.html'

    @pytest.mark.parametrize('url', ['https://a.com/docs', 'https://a.com/docs/'])
    def test_directory_like_path_gets_index(self, url):
        assert build_relative_path(url) == 'docs/index.html'

    def test_nested_path_without_extension(self):
        assert build_relative_path('https://a.com/api/v1/users') == 'api/v1/users/index.html'

    def test_file_path_kept(self):
        assert build_relative_path('https://a.com/css/site.css') == 'css/site.css'

    def test_dotfile_is_not_an_extension(self):
        assert build_relative_path('https://a.com/.well-known') == '.well-known/index.html'

    def test_query_spliced_into_index(self):
        assert build_relative_path('https://a.com/x?y=1') == 'x/-y=1-index.html'

    def test_query_is_sanitized(self):
        path = build_relative_path('https://a.com/?q=a&b=(c)')
        assert path == '-q=a-b=-c--index.html'

    def test_query_dropped_for_explicit_extension(self):
        # URLs that differ only by query collide on the same file
        assert build_relative_path('https://a.com/script.js?v=1') == 'script.js'
        assert build_relative_path('https://a.com/script.js?v=2') == 'script.js'

    def test_fragment_ignored(self):
        assert build_relative_path('https://a.com/page#top') == 'page/index.html'

    def test_segments_sanitized(self):
        assert build_relative_path('https://a.com/a:b/c*d.txt') == 'a-b/c-d.txt'

    def test_percent_encoding_sanitized(self):
        assert build_relative_path('https://a.com/my%20file.txt') == 'my-20file.txt'

    def test_dot_segments_resolved(self):
        assert build_relative_path('https://a.com/a/../b.txt') == 'b.txt'
        assert build_relative_path('https://a.com/docs/./intro/..') == 'docs/index.html'
        assert build_relative_path('https://a.com/../../etc/passwd.txt') == 'etc/passwd.txt'
        assert build_relative_path('https://a.com/a//b.txt') == 'a/b.txt'

    def test_long_file_name_truncated(self):
        path = build_relative_path('https://a.com/static/' + 'a' * 300 + '.js')
        directory, name = path.rsplit('/', 1)
        assert directory == 'static'
        assert len(name) == 250
        assert name.endswith('.js')

    def test_long_query_truncated_keeps_html(self):
        path = build_relative_path('https://a.com/p?' + 'q' * 300, max_filename_length=100)
        name = path.rsplit('/', 1)[-1]
        assert len(name) == 100
        assert name.startswith('-qqq')
        assert name.endswith('.html')

    @pytest.mark.parametrize('url', [
        'https://a.com',
        'https://a.com/a/b/',
        'https://a.com/x.y?z=<1>',
        'https://a.com/..',
        'https://a.com/(weird)!name,here',
    ])
    def test_final_segment_is_safe(self, url):
        name = build_relative_path(url, max_filename_length=50).rsplit('/', 1)[-1]
        assert name
        assert len(name) <= 50
        assert not RESERVED_CHARS.search(name)

    @pytest.mark.parametrize('url', ['', 'not a url', '/relative/path', 'example.com/page', 'http://[::1'])
    def test_malformed_url(self, url):
        with pytest.raises(MalformedURLError):
            build_relative_path(url)


class TestOutputFolderAllocator:

    def test_unused_name(self, tmp_path):
        allocator = OutputFolderAllocator(tmp_path)
        assert allocator.allocate('foo') == tmp_path / 'foo'

    def test_repeat_allocation_without_creating(self, tmp_path):
        allocator = OutputFolderAllocator(tmp_path)
        first = allocator.allocate('foo')
        second = allocator.allocate('foo')
        assert first != second
        assert second == tmp_path / 'foo_new(1)'

    def test_existing_folder_from_previous_run(self, tmp_path):
        OutputFolderAllocator(tmp_path).allocate('foo').mkdir()
        folder = OutputFolderAllocator(tmp_path).allocate('foo')
        assert folder == tmp_path / 'foo_new(1)'

    def test_probes_in_order(self, tmp_path):
        (tmp_path / 'foo').mkdir()
        (tmp_path / 'foo_new(1)').mkdir()
        allocator = OutputFolderAllocator(tmp_path)
        assert allocator.allocate('foo') == tmp_path / 'foo_new(2)'
        assert allocator.allocate('foo') == tmp_path / 'foo_new(3)'
