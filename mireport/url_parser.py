from dotenv import load_dotenv
from urllib.parse import urlparse
import logging, os, re, requests

from .exceptions import ExternalToolError
from .helpers import env_int

# load environment variables
load_dotenv()

PASTE_TIMEOUT = env_int(os.environ.get("PASTE_TIMEOUT"), 10)

logger = logging.getLogger(__name__)

"""
'example.com': {
    # regex to get paste's unique identifier
    'slug_regex': 'https://example.com/(.*)',

    # link to raw text using the unique identifier
    'raw_url': 'https://example.com/raw/{}'
}
"""
DEFAULT_URLS = {
    "dpaste.com": {
        "slug_regex": "https://dpaste.com/(.*)",
        "raw_url": "https://dpaste.com/{}.txt",
    },
    "hastebin.com": {
        "slug_regex": "https://hastebin.com/(.*)",
        "raw_url": "https://hastebin.com/raw/{}",
    },
    "paste.centos.org": {
        "slug_regex": "https://paste.centos.org/view/(.*)",
        "raw_url": "https://paste.centos.org/view/raw/{}",
    },
    "paste.ee": {
        "slug_regex": "https://paste.ee/p/(.*)",
        "raw_url": "https://paste.ee/d/{}",
    },
    "paste.opensuse.org": {
        "slug_regex": "https://paste.opensuse.org/(.*)",
        "raw_url": "https://paste.opensuse.org/view/raw/{}",
    },
    "pastebin.com": {
        "slug_regex": "https://pastebin.com/(.*)",
        "raw_url": "https://pastebin.com/raw/{}",
    },
    "termbin.com": {
        "raw_url": "https://termbin.com/{}",
    },
}


class URLParser:
    def __init__(self, urls=None, timeout=PASTE_TIMEOUT):
        # regex used to extract urls from text
        self.urls_regex = r"(?P<url>https?://[^\s]+)"
        self.urls = dict(urls if urls is not None else DEFAULT_URLS)
        self.timeout = timeout

    def extract_supported_urls(self, text):
        """
        Find paste urls in text

        Parameters
        ----------
        text : str
          text with urls

        Returns
        -------
        list of raw text urls for every supported paste site url
        """
        urls = re.findall(self.urls_regex, text or "")
        raw_urls = list()
        for url in urls:
            o = urlparse(url)
            # check if url is supported
            if o.hostname in self.urls:
                raw_url = self.get_raw_url(url, o.hostname, o.path)
                raw_urls.append(raw_url)
        return raw_urls

    def get_raw_url(self, url, hostname, path):
        # get url to raw content
        raw_url = url

        # check if its not already a raw url
        is_already_raw_url = re.search(
            re.escape(self.urls[hostname]["raw_url"]).replace(r"\{\}", "(.*)"), url
        )

        if not is_already_raw_url and "slug_regex" in self.urls[hostname]:
            slug = re.search(self.urls[hostname]["slug_regex"], url)
            if slug:
                raw_url = self.urls[hostname]["raw_url"].format(slug.group(1))

        return raw_url

    def get_paste(self, raw_url):
        logger.debug("Downloading paste %s", raw_url)
        try:
            r = requests.get(raw_url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise ExternalToolError("Failed to get paste " + raw_url + ": " + str(e)) from e
        return r.text

    def get_urls(self):
        return self.urls
