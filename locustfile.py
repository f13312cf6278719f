from locust import HttpUser, task, between
import random

from solders.keypair import Keypair

# Throwaway accounts; the server never needs their secrets
accounts = [str(Keypair().pubkey()) for _ in range(50)]
amounts = ["0.001", "0.5", "1", "5", "10"]


class BlinkUser(HttpUser):
    wait_time = between(1, 2)

    @task(1)
    def action_metadata(self):
        self.client.get("/api/actions/transfer-sol")

    @task(3)
    def transfer_transaction(self):
        # every POST triggers one getLatestBlockhash on the configured RPC
        self.client.post(
            "/api/actions/transfer-sol?amount=" + random.choice(amounts),
            json={"account": random.choice(accounts)},
            name="/api/actions/transfer-sol?amount=[amount]",
        )
