"""
Integration Tests - HTTP API

Module: tests.test_http_transport
Date: 2026-10-12
Version: 0.1.0

Exercises every route through aiohttp's test client.
"""

import os
import shutil
import tempfile

from aiohttp.test_utils import AioHTTPTestCase

from chirpy.core.chirpy_service import ChirpyService
from chirpy.core.config import ServerConfig
from chirpy.transport.http_transport import HTTPTransport


SECRET_KEY = "test-secret-key-at-least-32-characters-long!!!!"


class TestHTTPTransport(AioHTTPTestCase):
    """Integration tests for the HTTP routes"""

    async def get_application(self):
        """Build a fresh service on a temp directory"""
        self.test_dir = tempfile.mkdtemp()
        with open(os.path.join(self.test_dir, "index.html"), "w") as f:
            f.write("<h1>Welcome to Chirpy</h1>")

        config = ServerConfig(
            db_path=os.path.join(self.test_dir, "chirpy_database.json"),
            file_root=self.test_dir,
            jwt_secret=SECRET_KEY,
            bcrypt_rounds=4,
        )
        self.service = ChirpyService(config)
        return HTTPTransport(self.service, config).create_app()

    async def asyncTearDown(self):
        await super().asyncTearDown()
        shutil.rmtree(self.test_dir, ignore_errors=True)

    async def _register_and_login(self, email="alice@example.com", password="secret123"):
        resp = await self.client.post("/api/users", json={"email": email, "password": password})
        self.assertEqual(resp.status, 201)
        resp = await self.client.post("/api/login", json={"email": email, "password": password})
        self.assertEqual(resp.status, 200)
        return await resp.json()

    # ========================================================================
    # Health and CORS
    # ========================================================================

    async def test_healthz(self):
        """Test health check"""
        resp = await self.client.get("/api/healthz")
        self.assertEqual(resp.status, 200)
        self.assertEqual(await resp.text(), "OK")
        self.assertEqual(resp.headers["Access-Control-Allow-Origin"], "*")

    async def test_options_preflight(self):
        """Test OPTIONS returns 200 with CORS headers"""
        resp = await self.client.options("/api/chirps")
        self.assertEqual(resp.status, 200)
        self.assertIn("OPTIONS", resp.headers["Access-Control-Allow-Methods"])

    # ========================================================================
    # Chirps
    # ========================================================================

    async def test_create_and_get_chirp(self):
        """Test POST then GET /api/chirps/{id}"""
        resp = await self.client.post("/api/chirps", json={"body": "This is a kerfuffle opinion"})
        self.assertEqual(resp.status, 201)
        created = await resp.json()
        self.assertEqual(created, {"id": 1, "body": "This is a **** opinion"})

        resp = await self.client.get("/api/chirps/1")
        self.assertEqual(resp.status, 200)
        self.assertEqual(await resp.json(), created)

    async def test_list_chirps(self):
        """Test GET /api/chirps returns chirps in id order"""
        for body in ("first", "second"):
            await self.client.post("/api/chirps", json={"body": body})

        resp = await self.client.get("/api/chirps")
        self.assertEqual(resp.status, 200)
        self.assertEqual([c["id"] for c in await resp.json()], [1, 2])

    async def test_chirp_too_long(self):
        """Test over-long chirp returns 400"""
        resp = await self.client.post("/api/chirps", json={"body": "z" * 141})
        self.assertEqual(resp.status, 400)
        self.assertEqual(await resp.json(), {"error": "Chirp is too long"})

    async def test_chirp_not_found(self):
        """Test unknown chirp id returns 404"""
        resp = await self.client.get("/api/chirps/99")
        self.assertEqual(resp.status, 404)

    async def test_chirp_id_not_integer(self):
        """Test non-integer chirp id returns 400"""
        resp = await self.client.get("/api/chirps/abc")
        self.assertEqual(resp.status, 400)

    async def test_chirp_id_must_be_ascii_digits(self):
        """Test signed, padded, underscored and non-ASCII ids return 400"""
        await self.client.post("/api/chirps", json={"body": "first"})

        for raw_id in ("+1", "%201", "1_0", "%D9%A1", "-1"):
            resp = await self.client.get(f"/api/chirps/{raw_id}")
            self.assertEqual(resp.status, 400, raw_id)

        resp = await self.client.get("/api/chirps/01")
        self.assertEqual(resp.status, 200)

    async def test_invalid_json_body(self):
        """Test malformed JSON returns 400"""
        resp = await self.client.post(
            "/api/chirps", data="{not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status, 400)

    async def test_validate_chirp(self):
        """Test POST /api/validate_chirp cleans without storing"""
        resp = await self.client.post("/api/validate_chirp", json={"body": "SHARBERT time"})
        self.assertEqual(resp.status, 200)
        self.assertEqual(await resp.json(), {"cleaned_body": "**** time"})
        self.assertEqual(self.service.list_chirps(), [])

    # ========================================================================
    # Users and authentication
    # ========================================================================

    async def test_create_user_hides_hash(self):
        """Test POST /api/users returns only id and email"""
        resp = await self.client.post(
            "/api/users", json={"email": "alice@example.com", "password": "secret123"}
        )
        self.assertEqual(resp.status, 201)
        self.assertEqual(await resp.json(), {"id": 1, "email": "alice@example.com"})

    async def test_create_user_empty_password(self):
        """Test empty password returns 400"""
        resp = await self.client.post("/api/users", json={"email": "alice@example.com"})
        self.assertEqual(resp.status, 400)

    async def test_create_user_duplicate(self):
        """Test duplicate email returns 409"""
        await self.client.post("/api/users", json={"email": "a@example.com", "password": "x"})
        resp = await self.client.post("/api/users", json={"email": "a@example.com", "password": "y"})
        self.assertEqual(resp.status, 409)

    async def test_login(self):
        """Test login returns user fields and both tokens"""
        body = await self._register_and_login()

        self.assertEqual(body["id"], 1)
        self.assertEqual(body["email"], "alice@example.com")
        self.assertTrue(body["token"])
        self.assertTrue(body["refresh_token"])
        self.assertNotIn("hashed_password", body)

    async def test_login_wrong_password(self):
        """Test wrong password returns 401"""
        await self._register_and_login()
        resp = await self.client.post(
            "/api/login", json={"email": "alice@example.com", "password": "wrong"}
        )
        self.assertEqual(resp.status, 401)

    async def test_update_user(self):
        """Test PUT /api/users with an access token"""
        tokens = await self._register_and_login()

        resp = await self.client.put(
            "/api/users",
            json={"email": "new@example.com", "password": "newpass"},
            headers={"Authorization": f"Bearer {tokens['token']}"},
        )
        self.assertEqual(resp.status, 200)
        self.assertEqual(await resp.json(), {"id": 1, "email": "new@example.com"})

    async def test_update_user_requires_access_token(self):
        """Test PUT /api/users rejects missing and refresh tokens"""
        tokens = await self._register_and_login()
        payload = {"email": "new@example.com", "password": "newpass"}

        resp = await self.client.put("/api/users", json=payload)
        self.assertEqual(resp.status, 401)

        resp = await self.client.put(
            "/api/users",
            json=payload,
            headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
        )
        self.assertEqual(resp.status, 401)

    async def test_refresh_and_revoke(self):
        """Test refresh works until the refresh token is revoked"""
        tokens = await self._register_and_login()
        auth = {"Authorization": f"Bearer {tokens['refresh_token']}"}

        resp = await self.client.post("/api/refresh", headers=auth)
        self.assertEqual(resp.status, 200)
        self.assertTrue((await resp.json())["token"])

        resp = await self.client.post("/api/revoke", headers=auth)
        self.assertEqual(resp.status, 200)

        resp = await self.client.post("/api/refresh", headers=auth)
        self.assertEqual(resp.status, 401)

    async def test_refresh_with_access_token(self):
        """Test access token cannot refresh"""
        tokens = await self._register_and_login()
        resp = await self.client.post(
            "/api/refresh", headers={"Authorization": f"Bearer {tokens['token']}"}
        )
        self.assertEqual(resp.status, 401)

    async def test_revoke_without_token(self):
        """Test revoke always succeeds"""
        resp = await self.client.post("/api/revoke")
        self.assertEqual(resp.status, 200)

    # ========================================================================
    # Admin and static files
    # ========================================================================

    async def test_app_counts_hits(self):
        """Test /app serves files and /admin/metrics counts them"""
        resp = await self.client.get("/app")
        self.assertEqual(resp.status, 200)
        self.assertIn("Welcome to Chirpy", await resp.text())

        resp = await self.client.get("/app/index.html")
        self.assertEqual(resp.status, 200)

        resp = await self.client.get("/admin/metrics")
        self.assertEqual(await resp.text(), "Hits: 2")

        resp = await self.client.get("/api/reset")
        self.assertEqual(resp.status, 200)
        resp = await self.client.get("/admin/metrics")
        self.assertEqual(await resp.text(), "Hits: 0")

    async def test_app_missing_file(self):
        """Test unknown static file returns 404"""
        resp = await self.client.get("/app/missing.html")
        self.assertEqual(resp.status, 404)

    async def test_db_reset(self):
        """Test /admin/dbreset empties the dataset"""
        await self.client.post("/api/chirps", json={"body": "gone soon"})

        resp = await self.client.get("/admin/dbreset")
        self.assertEqual(resp.status, 200)
        self.assertEqual(await resp.text(), "Database has been reset")

        resp = await self.client.get("/api/chirps")
        self.assertEqual(await resp.json(), [])
        resp = await self.client.get("/api/chirps/1")
        self.assertEqual(resp.status, 404)
