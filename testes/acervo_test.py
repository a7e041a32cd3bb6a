import json
import os
import tempfile
import unittest

from acervo import Acervo, carregar_acervo, carregar_colecao
from acervo_bot.items import Episodio, Hino, Ossashizu, Paragrafo, Termo, Verso, colecao_do_item, montar_item


def gravar_json(pasta, arquivo, dados):
    with open(os.path.join(pasta, arquivo), "w", encoding="utf-8") as f:
        json.dump(dados, f, ensure_ascii=False)


class TestMontarItem(unittest.TestCase):
    def test_campos_opcionais_ausentes_viram_none(self):
        episodio = montar_item(Episodio, {"episodio_numero": 1, "titulo_p": "Início"})
        self.assertIsNone(episodio["conteudo_p"])
        self.assertIsNone(episodio["conteudo_j"])
        self.assertEqual(episodio["episodio_numero"], 1)

    def test_filhos_ausentes_viram_lista_vazia(self):
        hino = montar_item(Hino, {"hino_romaji": "Yorozuyo"})
        self.assertEqual(hino["versos"], [])

        ossashizu = montar_item(Ossashizu, {"data": "1887-01-04", "paragrafos": None})
        self.assertEqual(ossashizu["paragrafos"], [])

    def test_filhos_viram_itens(self):
        hino = montar_item(Hino, {"versos": [{"verso_numero": "1", "romaji": "ashiki"}, "lixo"]})
        self.assertEqual(len(hino["versos"]), 1)
        self.assertIsInstance(hino["versos"][0], Verso)
        self.assertIsNone(hino["versos"][0]["traducao"])

        ossashizu = montar_item(Ossashizu, {"paragrafos": [{"conteudo_port": "Agora"}]})
        self.assertIsInstance(ossashizu["paragrafos"][0], Paragrafo)

    def test_chaves_desconhecidas_sao_descartadas(self):
        termo = montar_item(Termo, {"romaji": "Oyassama", "extra": "x"})
        self.assertNotIn("extra", dict(termo))

    def test_colecao_do_item(self):
        self.assertEqual(colecao_do_item(Termo()), "termos")
        self.assertEqual(colecao_do_item(Ossashizu()), "ossashizu")
        self.assertIsNone(colecao_do_item(Verso()))


class TestCarregarAcervo(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.pasta = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def test_carrega_as_cinco_colecoes(self):
        gravar_json(self.pasta, "works.json", [{"romaji": "Oyassama", "kanji": "教祖", "significado": "Fundadora"}])
        gravar_json(self.pasta, "itsuwahen.json", [{"episodio_numero": "1", "titulo_p": "Início"}])
        gravar_json(self.pasta, "mikagurauta.json", [{"hino_romaji": "Yorozuyo", "versos": [{"romaji": "tasuke"}]}])
        gravar_json(self.pasta, "ofudessaki.json", [{"parte": "I", "versiculo": "1"}])
        gravar_json(self.pasta, "ossashizu.json", [{"data": "1887-01-04"}])

        acervo = carregar_acervo(self.pasta)

        self.assertIsInstance(acervo, Acervo)
        self.assertEqual(acervo.tamanhos(), {"termos": 1, "episodios": 1, "hinos": 1, "ofudessaki": 1, "ossashizu": 1})
        self.assertIsInstance(acervo.termos, tuple)
        self.assertIsInstance(acervo.hinos[0]["versos"][0], Verso)
        self.assertEqual(acervo.ossashizu[0]["paragrafos"], [])

    def test_arquivo_ausente_gera_colecao_vazia(self):
        gravar_json(self.pasta, "works.json", [{"romaji": "Oyassama"}])
        with self.assertLogs("acervo", level="ERROR"):
            acervo = carregar_acervo(self.pasta)
        self.assertEqual(len(acervo.termos), 1)
        self.assertEqual(acervo.hinos, ())

    def test_json_invalido(self):
        caminho = os.path.join(self.pasta, "works.json")
        with open(caminho, "w", encoding="utf-8") as f:
            f.write("{ não é json")
        with self.assertLogs("acervo", level="ERROR"):
            self.assertEqual(carregar_colecao(caminho, Termo), ())

    def test_conteudo_que_nao_e_lista(self):
        gravar_json(self.pasta, "works.json", {"romaji": "Oyassama"})
        with self.assertLogs("acervo", level="ERROR"):
            self.assertEqual(carregar_colecao(os.path.join(self.pasta, "works.json"), Termo), ())

    def test_registros_que_nao_sao_objetos_sao_ignorados(self):
        gravar_json(self.pasta, "works.json", [{"romaji": "Oyassama"}, "lixo", 3])
        with self.assertLogs("acervo", level="WARNING"):
            termos = carregar_colecao(os.path.join(self.pasta, "works.json"), Termo)
        self.assertEqual(len(termos), 1)


if __name__ == "__main__":
    unittest.main()
