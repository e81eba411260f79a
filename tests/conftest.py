"""Fixtures: mock Redis, worker pool, sample pages."""

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

from src.cache.redis import RedisCache
from src.scraper.pool import WorkerPool

ARTICLE_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>Battery Notes</title>
  <meta name="description" content="Notes on cell chemistry">
  <style>body { color: red; }</style>
  <script>window.tracking = true;</script>
</head>
<body>
  <nav><a href="/">Home</a></nav>
  <article>
    <h1>Lithium cells</h1>
    <p>Energy density keeps <em>rising</em> and <strong>costs</strong> keep falling.</p>
    <!-- editor note -->
    <pre><code class="language-python">print("charge")</code></pre>
    <blockquote><p>First line</p><p>Second line</p></blockquote>
    <ul><li>Anode</li><li>Cathode</li></ul>
    <p><a href="https://example.com/more" onclick="steal()">Read more</a></p>
    <img src="/cell.png" alt="A cell" style="width:10px">
  </article>
  <footer>Copyright</footer>
</body>
</html>
"""


@pytest_asyncio.fixture
async def redis_cache():
    """RedisCache backed by an in-memory FakeRedis instance."""
    client = FakeRedis(decode_responses=True)
    cache = RedisCache(client, default_ttl=3600)
    yield cache
    await client.aclose()


@pytest_asyncio.fixture
async def worker_pool():
    pool = WorkerPool(min_workers=1, max_workers=2, max_queue_size=4, queue_timeout=5.0, terminate_timeout=1.0)
    await pool.start()
    yield pool
    await pool.close()


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML
