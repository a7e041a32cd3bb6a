import os

BOT_NAME = "acervo_bot"
SPIDER_MODULES = ["acervo_bot.spiders"]
NEWSPIDER_MODULE = "acervo_bot.spiders"
USER_AGENT = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:108.0) Gecko/20100101 Firefox/108.0"
ROBOTSTXT_OBEY = False

ITEM_PIPELINES = {
    "acervo_bot.pipelines.AcervoBotPipeline": 300,
    "acervo_bot.pipelines.AcervoJsonPipeline": 400,
}

REQUEST_FINGERPRINTER_IMPLEMENTATION = "2.7"
TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
FEED_EXPORT_ENCODING = "utf-8"

DOWNLOAD_TIMEOUT = 360

ACERVO_BASE_URL = os.environ.get("ACERVO_BASE_URL", "")
ACERVO_PASTA = os.environ.get("ACERVO_PASTA", "data")
