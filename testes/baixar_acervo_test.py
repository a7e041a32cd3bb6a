import subprocess
import unittest
from unittest import mock

import baixar_acervo
from acervo import Acervo


class TestBaixarAcervo(unittest.TestCase):
    def test_montar_comando_crawl(self):
        self.assertEqual(
            baixar_acervo.montar_comando_crawl("https://acervo.exemplo.org", "data"),
            [
                "scrapy", "crawl", "acervo",
                "-a", "base_url=https://acervo.exemplo.org",
                "-s", "ACERVO_PASTA=data",
                "-s", "LOG_FILE=data/log.txt",
            ],
        )

    def test_sem_base_url(self):
        with self.assertLogs("baixar_acervo", level="ERROR"):
            self.assertFalse(baixar_acervo.baixar_acervo(""))

    @mock.patch("baixar_acervo.limpar_pasta_acervo")
    @mock.patch("baixar_acervo.subprocess.run")
    def test_crawl_com_falha(self, run, _limpar):
        run.return_value = subprocess.CompletedProcess(args=[], returncode=1)
        with self.assertLogs("baixar_acervo", level="ERROR"):
            self.assertFalse(baixar_acervo.baixar_acervo("https://acervo.exemplo.org"))

    @mock.patch("baixar_acervo.carregar_acervo")
    @mock.patch("baixar_acervo.limpar_pasta_acervo")
    @mock.patch("baixar_acervo.subprocess.run")
    def test_crawl_com_colecoes_vazias(self, run, _limpar, carregar):
        run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        carregar.return_value = Acervo(termos=({"romaji": "Oyassama"},))
        with self.assertLogs("baixar_acervo", level="WARNING") as logs:
            self.assertTrue(baixar_acervo.baixar_acervo("https://acervo.exemplo.org"))
        self.assertIn("episodios", "\n".join(logs.output))
        run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
