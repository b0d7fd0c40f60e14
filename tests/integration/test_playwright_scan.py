"""
Integration tests for scanning real pages through PlaywrightClient.

A small stand-in for axe-core implements the in-page API (configure,
utils.getFrameContexts, runPartial, finishRun, run) so the tests exercise
real frame switching, script execution and tab handling without needing the
axe-core package.
"""

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from axe_browser.builder import AxeBuilder
from axe_browser.client import PlaywrightClient
from axe_browser.config import AxeConfig
from axe_browser.errors import FrameTraversalError

STUB_AXE = """
window.axe = window.axe || {
  config: {},
  configure: function (config) { Object.assign(this.config, config); },
  utils: {
    getFrameContexts: function (context) {
      var frames = document.querySelectorAll('iframe');
      return Array.prototype.map.call(frames, function (frame, i) {
        return {
          frameSelector: 'iframe:nth-of-type(' + (i + 1) + ')',
          frameContext: { exclude: [] }
        };
      });
    }
  },
  runPartial: function (context, options) {
    return Promise.resolve({ title: document.title, options: options });
  },
  finishRun: function (partials, options) {
    return Promise.resolve({
      violations: [], passes: [], incomplete: [], inapplicable: [],
      url: location.href,
      toolOptions: options,
      partials: partials
    });
  },
  run: function (context, options) {
    return Promise.resolve({ violations: [], url: location.href, toolOptions: options });
  }
};
"""

NESTED_PAGE = """<!DOCTYPE html>
<html>
<head><title>Top</title></head>
<body>
    <h1>Main Page Content</h1>
    <iframe srcdoc="<title>First</title><iframe srcdoc='&lt;title&gt;Inner&lt;/title&gt;'></iframe>"></iframe>
    <iframe srcdoc="<title>Second</title><p>second</p>"></iframe>
</body>
</html>"""


@pytest.fixture
def config():
    return AxeConfig(branding="axe-browser-tests")


async def _launch(playwright):
    try:
        return await playwright.chromium.launch()
    except PlaywrightError as e:
        pytest.skip(f"Chromium not available: {e}")


class TestPlaywrightScan:
    @pytest.mark.asyncio
    async def test_partial_scan_of_nested_frames(self, config):
        async with async_playwright() as p:
            browser = await _launch(p)
            page = await browser.new_page()
            await page.set_content(NESTED_PAGE)

            results = await AxeBuilder(page, axe_source=STUB_AXE, config=config).with_tags("wcag2a").analyze()

            assert [partial["title"] for partial in results.partials] == ["Top", "First", "Inner", "Second"]
            assert results.tool_options == {"runOnly": {"type": "tag", "values": ["wcag2a"]}}
            # Merge ran in the temporary blank tab, which is gone again
            assert results.url == "about:blank"
            assert len(page.context.pages) == 1

            await browser.close()

    @pytest.mark.asyncio
    async def test_legacy_scan(self, config):
        async with async_playwright() as p:
            browser = await _launch(p)
            page = await browser.new_page()
            await page.set_content(NESTED_PAGE)

            results = await AxeBuilder(page, axe_source=STUB_AXE, config=config).set_legacy_mode().analyze()

            assert results.violations == []
            assert results.url == page.url
            configured = await page.frames[1].evaluate("() => window.axe.config.branding.application")
            assert configured == "axe-browser-tests"

            await browser.close()


class TestPlaywrightClient:
    @pytest.mark.asyncio
    async def test_frame_stack_and_execute(self):
        async with async_playwright() as p:
            browser = await _launch(p)
            page = await browser.new_page()
            await page.set_content(NESTED_PAGE)
            client = PlaywrightClient(page)

            assert await client.execute("return document.title;") == "Top"
            assert await client.execute("return arguments[0] + arguments[1];", 2, 3) == 5

            frame_element = await client.find("iframe")
            assert await client.element_exists(frame_element)
            await client.switch_to_frame(frame_element)
            assert await client.execute("return document.title;") == "First"

            await client.switch_to_parent_frame()
            await client.switch_to_parent_frame()  # no-op at the top
            assert await client.execute("return document.title;") == "Top"

            await browser.close()

    @pytest.mark.asyncio
    async def test_switching_into_non_frame_element_fails(self):
        async with async_playwright() as p:
            browser = await _launch(p)
            page = await browser.new_page()
            await page.set_content(NESTED_PAGE)
            client = PlaywrightClient(page)

            heading = await client.find("h1")
            with pytest.raises(FrameTraversalError):
                await client.switch_to_frame(heading)

            await browser.close()

    @pytest.mark.asyncio
    async def test_window_lifecycle(self):
        async with async_playwright() as p:
            browser = await _launch(p)
            page = await browser.new_page()
            client = PlaywrightClient(page)

            original = await client.get_window_handle()
            new_window = await client.create_window("tab")
            assert new_window.handle and new_window.handle != original

            await client.switch_to_window(new_window.handle)
            await client.navigate_to("about:blank")
            await client.close_window()
            await client.switch_to_window(original)

            assert await client.get_window_handle() == original
            assert client.page is page

            await browser.close()
