from utils.contact_links import maps_url, whatsapp_url


def test_whatsapp_url_strips_non_digits_and_encodes_greeting():
    url = whatsapp_url("+62 812-3456-7890", "Budi")

    assert url.startswith("https://wa.me/6281234567890?text=")
    assert "Halo%20Budi%2C%20pesanan%20Anda%20sedang%20dalam%20perjalanan!" in url


def test_maps_url_encodes_address():
    assert maps_url("Jl. Mawar No. 5, Bandung") == "https://maps.google.com/?q=Jl.%20Mawar%20No.%205%2C%20Bandung"
    assert maps_url("") == "https://maps.google.com/?q="
