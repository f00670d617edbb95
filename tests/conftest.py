"""Global test fixtures and configuration."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

SOURCE_DIR = Path("src/main/java")

PAYMENT_SERVICE = """\
package com.example.payment;

import com.example.client.StripeClient;

/**
 * Handles card payments.
 *
 * @aicontext-graph
 * PaymentService
 *   ├─[uses]→ StripeClient, PaymentRepository
 *   ├─[calls]→ StripeClient.charge(), PaymentRepository.save()
 *   ├─[db]→ W:payment_transactions(id,user_id,amount)
 *   └─[by]← OrderService.checkout()
 */
public class PaymentService {
    private final StripeClient stripeClient;
    private final PaymentRepository paymentRepository;

    public PaymentService(StripeClient stripeClient, PaymentRepository paymentRepository) {
        this.stripeClient = stripeClient;
        this.paymentRepository = paymentRepository;
    }

    /**
     * @aicontext-rule [2024-05-01] Never retry a declined charge.
     */
    public void pay(String userId, long amount) {
        stripeClient.charge(userId, amount);
    }
}
"""

STRIPE_CLIENT = """\
package com.example.client;

public class StripeClient {
    public void charge(String userId, long amount) {
    }
}
"""

PAYMENT_REPOSITORY = """\
package com.example.payment;

public interface PaymentRepository {
    void save(Object transaction);
}
"""

ORDER_SERVICE = """\
package com.example.order;

import com.example.payment.PaymentService;

/**
 * @aicontext-graph
 * OrderService
 *   └─[calls]→ PaymentService.pay()
 */
public class OrderService {
    private PaymentService paymentService;

    public void checkout() {
    }
}
"""


def write_java(source_root: Path, relative_path: str, source: str) -> Path:
	"""Write a Java file below a source root, creating parent directories."""
	path = source_root / relative_path
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(dedent(source), encoding="utf-8")
	return path


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
	"""Empty Java source root inside a temporary project."""
	root = tmp_path / SOURCE_DIR
	root.mkdir(parents=True)
	return root


@pytest.fixture
def java_project(tmp_path: Path, source_root: Path) -> Path:
	"""
	Small Java project with one documented class per package.

	PaymentService documents all of its dependencies; OrderService uses
	PaymentService without documenting it.
	"""
	write_java(source_root, "com/example/payment/PaymentService.java", PAYMENT_SERVICE)
	write_java(source_root, "com/example/payment/PaymentRepository.java", PAYMENT_REPOSITORY)
	write_java(source_root, "com/example/client/StripeClient.java", STRIPE_CLIENT)
	write_java(source_root, "com/example/order/OrderService.java", ORDER_SERVICE)
	return tmp_path
